"""condocheck - facilities management for condominium staff."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.db_client import close_connection, init_db
from src.core.logging import configure_logfire, instrument_fastapi, instrument_pydantic_ai
from src.interface.auth_router import router as auth_router
from src.interface.board_router import router as board_router
from src.interface.dependencies import get_repositories
from src.interface.error_handlers import register_exception_handlers
from src.interface.facilities_router import router as facilities_router
from src.interface.home_router import router as home_router
from src.interface.report_router import router as report_router
from src.interface.task_router import router as task_router
from src.services.bootstrap_service import seed_defaults


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Warn about settings that are unsafe or disable features."""
    if settings.is_production and settings.secret_key == "change-me-in-production":
        msg = "SECRET_KEY must be set in production"
        raise ValueError(msg)

    if not settings.openrouter_api_key:
        logger.warning("startup_validation", extra={"service": "openrouter", "status": "disabled"})
    else:
        logger.info("startup_validation", extra={"service": "openrouter", "status": "ok"})


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Configure logging first so validation logs are captured
    configure_logfire()
    validate_startup_configuration()

    await init_db()
    await seed_defaults(repos=get_repositories())
    logger.info("Database initialized")

    instrument_pydantic_ai()
    yield
    await close_connection()


app = FastAPI(
    title="condocheck",
    description="Checklists, incidents and procurement for condominium staff",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)
register_exception_handlers(app)

# Register routers
app.include_router(auth_router)
app.include_router(home_router)
app.include_router(task_router)
app.include_router(facilities_router)
app.include_router(board_router)
app.include_router(report_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)

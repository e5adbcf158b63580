"""Map service exceptions onto JSON error responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.core.errors import DatabaseError, ErrorCode, classify_error_with_response
from src.core.logging import log_with_context


logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.ERR_RECORD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ERR_PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ERR_INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ERR_INVALID_STATE_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.ERR_EVIDENCE_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ERR_VALIDATION: status.HTTP_400_BAD_REQUEST,
}


async def handle_service_error(request: Request, exc: Exception) -> JSONResponse:
    """Classify a service exception and answer with its code and suggestion."""
    response = classify_error_with_response(exc)
    status_code = STATUS_BY_CODE.get(response.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    log_with_context(logger, "warning", "request_failed", path=request.url.path, code=response.code, error=str(exc))
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


async def handle_database_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("database_error", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": ErrorCode.ERR_UNKNOWN,
            "message": "The data store is unavailable.",
            "suggestion": "Please try again in a moment.",
            "severity": "high",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type in (KeyError, PermissionError, ValueError):
        app.add_exception_handler(exc_type, handle_service_error)
    app.add_exception_handler(DatabaseError, handle_database_error)

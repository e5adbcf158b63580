"""Login, registration and session endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from src.core.repository import Repositories
from src.domain.user import User
from src.interface.dependencies import clear_session, get_current_user, get_repositories, issue_session
from src.services import notification_service, user_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    """Login form."""

    name: str = Field(..., description="Login name (case-insensitive)")
    password: str = Field(..., description="Password")


def public_user(user: User) -> dict[str, Any]:
    """User fields safe to send to the browser."""
    return user.model_dump(mode="json", exclude={"password_hash"})


@router.post("/login")
async def login(
    credentials: Credentials,
    response: Response,
    repos: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    """Log in and return the user together with today's reminder, if any."""
    user = await user_service.authenticate(repos=repos, name=credentials.name, password=credentials.password)
    issue_session(response, user)

    notification = None
    try:
        notification = await notification_service.build_daily_notification(repos=repos, user=user)
    except Exception as e:
        # The reminder is best effort and never blocks a login
        logger.warning("daily_notification_failed", extra={"user_id": user.id, "error": str(e)})

    return {
        "user": public_user(user),
        "notification": notification.model_dump() if notification else None,
    }


@router.post("/register")
async def register(
    credentials: Credentials,
    response: Response,
    repos: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    """Create a building manager account and log it in."""
    user = await user_service.register_owner(repos=repos, name=credentials.name, password=credentials.password)
    issue_session(response, user)
    return {"user": public_user(user)}


@router.post("/logout")
async def logout(response: Response) -> dict[str, str]:
    clear_session(response)
    logger.info("logout_success")
    return {"status": "logged_out"}


@router.get("/me")
async def me(user: User = Depends(get_current_user)) -> dict[str, Any]:
    return public_user(user)

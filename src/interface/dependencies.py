"""Request dependencies: repositories, session user and selected condominium."""

import logging

from fastapi import Depends, HTTPException, Query, Request, Response, status
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from src.core.config import constants, settings
from src.core.db_client import RecordNotFoundError
from src.core.logging import log_with_user_context
from src.core.permissions import Capability, has_capability
from src.core.repository import Repositories, build_repositories
from src.domain.user import User


logger = logging.getLogger(__name__)

serializer = URLSafeTimedSerializer(str(settings.secret_key), salt="condocheck-session")


class _RepositoryState:
    """Singleton state for the SQLite-backed repository bundle."""

    instance: Repositories | None = None


def get_repositories() -> Repositories:
    """Repository bundle shared by all requests (overridden in tests)."""
    if _RepositoryState.instance is None:
        _RepositoryState.instance = build_repositories()
    return _RepositoryState.instance


def issue_session(response: Response, user: User) -> None:
    """Set the signed session cookie for a logged-in user."""
    response.set_cookie(
        key=constants.SESSION_COOKIE_NAME,
        value=serializer.dumps({"user_id": user.id}),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=settings.session_max_age_seconds,
    )
    log_with_user_context(logger, "info", "session_issued", user_id=user.id, role=str(user.role))


def clear_session(response: Response) -> None:
    response.delete_cookie(key=constants.SESSION_COOKIE_NAME, httponly=True, samesite="strict")


def _unauthorized(reason: str, path: str) -> HTTPException:
    logger.warning(reason, extra={"path": path})
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")


async def get_current_user(request: Request, repos: Repositories = Depends(get_repositories)) -> User:
    """Resolve the logged-in user from the session cookie."""
    session_token = request.cookies.get(constants.SESSION_COOKIE_NAME)
    if not session_token:
        raise _unauthorized("session_missing_cookie", request.url.path)

    try:
        session_data = serializer.loads(session_token, max_age=settings.session_max_age_seconds)
    except (BadSignature, SignatureExpired) as err:
        raise _unauthorized("session_tampered_or_expired", request.url.path) from err

    try:
        user = await repos.users.get(str(session_data.get("user_id", "")))
    except RecordNotFoundError as err:
        raise _unauthorized("session_unknown_user", request.url.path) from err

    if not user.active:
        raise _unauthorized("session_inactive_user", request.url.path)
    return user


def get_condo_id(
    condo_id: str | None = Query(default=None, description="Condominium to act on (managers only)"),
    user: User = Depends(get_current_user),
) -> str:
    """Condominium the request acts on.

    Roles that can switch condominium may pick any; everyone else is pinned to
    their home condominium.
    """
    if condo_id and has_capability(user.role, Capability.SWITCH_CONDO):
        return condo_id
    if user.condo_id:
        return user.condo_id
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Select a condominium first")

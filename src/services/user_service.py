"""User service: login, owner registration and team management."""

import hashlib
import logging
import secrets

from src.core.config import constants
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.log import LogAction, LogModule
from src.domain.update_models import UserUpdate
from src.domain.user import WORKER_ROLES, User, UserRole
from src.services import activity_log_service


logger = logging.getLogger(__name__)

_HASH_ALGORITHM = "pbkdf2_sha256"
INVALID_LOGIN_MESSAGE = "Invalid username or password"


def hash_password(password: str, *, salt: str | None = None) -> str:
    """Hash a password as ``pbkdf2_sha256$iterations$salt$hex``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode(),
        salt.encode(),
        constants.PASSWORD_HASH_ITERATIONS,
    )
    return f"{_HASH_ALGORITHM}${constants.PASSWORD_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        algorithm, iterations, salt, expected = password_hash.split("$", 3)
    except ValueError:
        return False
    if algorithm != _HASH_ALGORITHM or not iterations.isdigit():
        return False

    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    return secrets.compare_digest(digest.hex(), expected)


def _clean_name(name: str) -> str:
    name = name.strip()
    if len(name) < constants.MIN_USERNAME_LENGTH:
        msg = f"Name must have at least {constants.MIN_USERNAME_LENGTH} characters"
        raise ValueError(msg)
    return name


async def authenticate(*, repos: Repositories, name: str, password: str) -> User:
    """Log a user in by name (case-insensitive) and password.

    Raises:
        ValueError: If the name is too short
        PermissionError: If the credentials do not match an active user
    """
    with span("user_service.authenticate"):
        name = _clean_name(name)

        user = await repos.users.find_by_name(name)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("login_failed", extra={"login_name": name})
            raise PermissionError(INVALID_LOGIN_MESSAGE)

        if not user.active:
            logger.warning("login_inactive_user", extra={"user_id": user.id})
            raise PermissionError(INVALID_LOGIN_MESSAGE)

        logger.info("User %s logged in", user.id)
        return user


async def register_owner(*, repos: Repositories, name: str, password: str) -> User:
    """Create a new building manager (SINDICO) account from the login screen.

    Raises:
        ValueError: If the name is too short, the password empty or the name taken
    """
    with span("user_service.register_owner"):
        name = _clean_name(name)
        if not password:
            msg = "Password must not be empty"
            raise ValueError(msg)
        if await repos.users.find_by_name(name) is not None:
            msg = f"User {name} already exists"
            raise ValueError(msg)

        user = await repos.users.create(
            {
                "name": name,
                "role": UserRole.SINDICO,
                "password_hash": hash_password(password),
                "active": True,
                "condo_id": None,
            }
        )
        logger.info("Registered owner %s", user.id)
        return user


async def create_user(
    *,
    repos: Repositories,
    actor: User,
    name: str,
    password: str,
    role: UserRole,
    condo_id: str | None,
    job_title: str | None = None,
    email: str = "",
    avatar: str | None = None,
) -> User:
    """Add a team member.

    Raises:
        PermissionError: If the actor cannot manage users
        ValueError: If the name is already taken
    """
    with span("user_service.create_user"):
        require_capability(actor, Capability.MANAGE_USERS)
        name = _clean_name(name)
        if await repos.users.find_by_name(name) is not None:
            msg = f"User {name} already exists"
            raise ValueError(msg)

        user = await repos.users.create(
            {
                "name": name,
                "role": role,
                "job_title": job_title,
                "email": email,
                "avatar": avatar,
                "password_hash": hash_password(password),
                "active": True,
                "condo_id": condo_id,
            }
        )
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.CREATE,
            module=LogModule.USER,
            target_name=user.name,
            condo_id=condo_id or actor.condo_id or "",
        )
        logger.info("Created user %s with role %s", user.id, role)
        return user


async def update_user(*, repos: Repositories, actor: User, user_id: str, changes: UserUpdate) -> User:
    """Edit a team member; a new password is re-hashed."""
    with span("user_service.update_user"):
        require_capability(actor, Capability.MANAGE_USERS)
        current = await repos.users.get(user_id)

        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        if password := data.pop("password", None):
            data["password_hash"] = hash_password(password)
        if not data:
            return current

        user = await repos.users.update(user_id, data)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.UPDATE,
            module=LogModule.USER,
            target_name=user.name,
            condo_id=user.condo_id or actor.condo_id or "",
        )
        return user


async def toggle_active(*, repos: Repositories, actor: User, user_id: str) -> User:
    """Flip a team member between active and inactive.

    Raises:
        ValueError: If the actor tries to deactivate themselves
    """
    with span("user_service.toggle_active"):
        require_capability(actor, Capability.MANAGE_USERS)
        if user_id == actor.id:
            msg = "Cannot deactivate your own account"
            raise ValueError(msg)

        user = await repos.users.get(user_id)
        updated = await repos.users.update(user_id, {"active": not user.active})
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.UPDATE_STATUS,
            module=LogModule.USER,
            target_name=updated.name,
            condo_id=updated.condo_id or actor.condo_id or "",
        )
        logger.info("User %s active=%s", user_id, updated.active)
        return updated


async def delete_user(*, repos: Repositories, actor: User, user_id: str) -> None:
    """Remove a team member. Tasks assigned to them are left as they are."""
    with span("user_service.delete_user"):
        require_capability(actor, Capability.MANAGE_USERS)
        if user_id == actor.id:
            msg = "Cannot delete your own account"
            raise ValueError(msg)

        user = await repos.users.get(user_id)
        await repos.users.delete(user_id)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.DELETE,
            module=LogModule.USER,
            target_name=user.name,
            condo_id=user.condo_id or actor.condo_id or "",
        )


async def get_user(*, repos: Repositories, user_id: str) -> User:
    """Fetch a user; raises KeyError if it does not exist."""
    with span("user_service.get_user"):
        return await repos.users.get(user_id)


async def list_users(*, repos: Repositories, condo_id: str) -> list[User]:
    """Team members of a condominium, by name."""
    with span("user_service.list_users"):
        users = await repos.users.list_by_condo(condo_id)
        return sorted(users, key=lambda user: user.name.lower())


async def list_assignable_workers(*, repos: Repositories, condo_id: str) -> list[User]:
    """Active members of the condominium who can be given tasks."""
    with span("user_service.list_assignable_workers"):
        users = await list_users(repos=repos, condo_id=condo_id)
        return [user for user in users if user.active and user.role in WORKER_ROLES]

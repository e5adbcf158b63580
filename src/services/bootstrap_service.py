"""First-run seeding of an empty database."""

import logging

from src.core.clock import utc_now
from src.core.config import constants, settings
from src.core.logging import span
from src.core.repository import Repositories
from src.domain.user import UserRole
from src.services.user_service import hash_password


logger = logging.getLogger(__name__)

DEFAULT_CONDO = {"name": "Residencial Aurora", "address": "Av. Brasil, 1500 - Centro"}

# (name, role, lives in the default condominium)
DEMO_STAFF: tuple[tuple[str, UserRole, bool], ...] = (
    ("Ricardo Alencar", UserRole.SINDICO, False),
    ("Mariana Costa", UserRole.GESTOR, True),
    ("João Silva", UserRole.ZELADOR, True),
    ("Marcos Souza", UserRole.LIMPEZA, True),
)


async def seed_categories(*, repos: Repositories) -> int:
    """Insert the default task categories when the catalog is empty."""
    if await repos.categories.list_all():
        return 0
    for name in constants.DEFAULT_CATEGORIES:
        await repos.categories.create({"name": name})
    return len(constants.DEFAULT_CATEGORIES)


async def seed_demo_staff(*, repos: Repositories, password: str) -> int:
    """Create the demo condominium and its staff when there are no users."""
    if await repos.users.list_all():
        return 0

    condo = await repos.condos.create({**DEFAULT_CONDO, "created_at": utc_now()})
    password_hash = hash_password(password)
    for name, role, in_condo in DEMO_STAFF:
        await repos.users.create(
            {
                "name": name,
                "role": role,
                "password_hash": password_hash,
                "active": True,
                "condo_id": condo.id if in_condo else None,
            }
        )
    return len(DEMO_STAFF)


async def seed_defaults(*, repos: Repositories, include_demo: bool | None = None) -> None:
    """Seed default categories and, unless disabled, the demo condominium and staff."""
    with span("bootstrap_service.seed_defaults"):
        categories = await seed_categories(repos=repos)
        staff = 0
        if settings.seed_demo_data if include_demo is None else include_demo:
            staff = await seed_demo_staff(repos=repos, password=settings.seed_password)
        if categories or staff:
            logger.info("Seeded defaults", extra={"categories": categories, "users": staff})

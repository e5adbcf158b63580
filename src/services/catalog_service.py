"""Editable lookup lists: task categories and job functions."""

import logging

from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import CatalogRepository, Repositories
from src.domain.catalog import CatalogEntry
from src.domain.user import User


logger = logging.getLogger(__name__)

CATEGORIES = "categories"
JOB_FUNCTIONS = "job_functions"

_REQUIRED_CAPABILITY: dict[str, Capability] = {
    CATEGORIES: Capability.MANAGE_CATEGORIES,
    JOB_FUNCTIONS: Capability.MANAGE_USERS,
}


def _catalog(repos: Repositories, kind: str) -> CatalogRepository:
    if kind == CATEGORIES:
        return repos.categories
    if kind == JOB_FUNCTIONS:
        return repos.job_functions
    msg = f"Unknown catalog: {kind}"
    raise ValueError(msg)


async def list_entries(*, repos: Repositories, kind: str) -> list[CatalogEntry]:
    """Entries of a catalog in insertion order."""
    with span("catalog_service.list_entries"):
        return await _catalog(repos, kind).list_all()


async def add_entry(*, repos: Repositories, actor: User, kind: str, name: str) -> CatalogEntry:
    """Add a label; adding one that already exists returns the existing entry.

    Raises:
        ValueError: If the label is blank
        PermissionError: If the actor cannot edit this catalog
    """
    with span("catalog_service.add_entry"):
        catalog = _catalog(repos, kind)
        require_capability(actor, _REQUIRED_CAPABILITY[kind])

        name = name.strip()
        if not name:
            msg = "Name must not be empty"
            raise ValueError(msg)

        existing = await catalog.find_by_name(name)
        if existing is not None:
            return existing

        entry = await catalog.create({"name": name})
        logger.info("Added %s entry %s", kind, name)
        return entry


async def remove_entry(*, repos: Repositories, actor: User, kind: str, entry_id: str) -> None:
    with span("catalog_service.remove_entry"):
        catalog = _catalog(repos, kind)
        require_capability(actor, _REQUIRED_CAPABILITY[kind])
        await catalog.delete(entry_id)

"""Condominium registry service."""

import logging

from src.core.clock import utc_now
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.condo import Condo
from src.domain.log import LogAction, LogModule
from src.domain.update_models import CondoUpdate
from src.domain.user import User
from src.services import activity_log_service


logger = logging.getLogger(__name__)


async def create_condo(*, repos: Repositories, actor: User, name: str, address: str = "") -> Condo:
    """Register a new condominium."""
    with span("condo_service.create_condo"):
        require_capability(actor, Capability.MANAGE_CONDOS)
        condo = await repos.condos.create({"name": name.strip(), "address": address, "created_at": utc_now()})
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.CREATE,
            module=LogModule.CONDO,
            target_name=condo.name,
            condo_id=condo.id,
        )
        logger.info("Created condominium %s (%s)", condo.id, condo.name)
        return condo


async def update_condo(*, repos: Repositories, actor: User, condo_id: str, changes: CondoUpdate) -> Condo:
    """Rename or re-address a condominium."""
    with span("condo_service.update_condo"):
        require_capability(actor, Capability.MANAGE_CONDOS)
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        if not data:
            return await repos.condos.get(condo_id)

        condo = await repos.condos.update(condo_id, data)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.UPDATE,
            module=LogModule.CONDO,
            target_name=condo.name,
            condo_id=condo.id,
        )
        return condo


async def delete_condo(*, repos: Repositories, actor: User, condo_id: str) -> None:
    """Remove a condominium. Records that reference it are kept."""
    with span("condo_service.delete_condo"):
        require_capability(actor, Capability.MANAGE_CONDOS)
        condo = await repos.condos.get(condo_id)
        await repos.condos.delete(condo_id)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.DELETE,
            module=LogModule.CONDO,
            target_name=condo.name,
            condo_id=condo.id,
        )
        logger.info("Deleted condominium %s", condo_id)


async def get_condo(*, repos: Repositories, condo_id: str) -> Condo:
    with span("condo_service.get_condo"):
        return await repos.condos.get(condo_id)


async def list_condos(*, repos: Repositories) -> list[Condo]:
    """All condominiums, by name."""
    with span("condo_service.list_condos"):
        condos = await repos.condos.list_all()
        return sorted(condos, key=lambda condo: condo.name.lower())

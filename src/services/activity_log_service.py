"""Audit trail of user actions, capped to the most recent entries."""

import logging
from collections.abc import Collection
from datetime import datetime

from src.core.clock import utc_now
from src.core.config import constants
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.log import ActivityLog, LogAction, LogModule
from src.domain.user import User


logger = logging.getLogger(__name__)


async def record(
    *,
    repos: Repositories,
    actor: User,
    action: LogAction,
    module: LogModule,
    target_name: str,
    condo_id: str,
    now: datetime | None = None,
) -> ActivityLog:
    """Append an audit entry and drop the oldest beyond the retention cap."""
    with span("activity_log_service.record"):
        entry = await repos.logs.create(
            {
                "user_id": actor.id,
                "user_name": actor.name,
                "action": action,
                "module": module,
                "target_name": target_name,
                "timestamp": now or utc_now(),
                "condo_id": condo_id,
            }
        )
        removed = await repos.logs.prune(keep=constants.ACTIVITY_LOG_MAX_ENTRIES)
        if removed:
            logger.debug("Pruned %d old activity log entries", removed)
        return entry


async def list_entries(
    *,
    repos: Repositories,
    viewer: User,
    condo_id: str,
    modules: Collection[LogModule] | None = None,
) -> list[ActivityLog]:
    """Audit entries of a condominium, newest first.

    Args:
        repos: Repository bundle
        viewer: User reading the trail
        condo_id: Condominium whose entries to list
        modules: Only keep entries about these areas (all areas when empty)

    Raises:
        PermissionError: If the viewer's role cannot read the audit log
    """
    with span("activity_log_service.list_entries"):
        require_capability(viewer, Capability.VIEW_AUDIT_LOG)
        entries = await repos.logs.list_by_condo(condo_id)
        if modules:
            entries = [entry for entry in entries if entry.module in modules]
        return sorted(entries, key=lambda entry: entry.timestamp, reverse=True)

"""Incident log: hazards and events reported by staff."""

import logging

from src.core.clock import utc_now
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.incident import Incident, IncidentStatus
from src.domain.log import LogAction, LogModule
from src.domain.user import User
from src.services import activity_log_service


logger = logging.getLogger(__name__)


async def record_incident(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    title: str,
    description: str = "",
    photos: list[str] | None = None,
) -> Incident:
    """Record a new open incident on behalf of the actor."""
    with span("incident_service.record_incident"):
        require_capability(actor, Capability.RECORD_INCIDENTS)
        incident = await repos.incidents.create(
            {
                "condo_id": condo_id,
                "user_id": actor.id,
                "user_name": actor.name,
                "title": title.strip(),
                "description": description,
                "timestamp": utc_now(),
                "status": IncidentStatus.OPEN,
                "photos": list(photos or []),
            }
        )
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.CREATE,
            module=LogModule.INCIDENT,
            target_name=incident.title,
            condo_id=condo_id,
        )
        logger.info("Recorded incident %s: %s", incident.id, incident.title)
        return incident


async def toggle_incident_status(*, repos: Repositories, actor: User, condo_id: str, incident_id: str) -> Incident:
    """Flip an incident between OPEN and RESOLVED."""
    with span("incident_service.toggle_incident_status"):
        require_capability(actor, Capability.RECORD_INCIDENTS)
        incident = await repos.incidents.get_in_condo(incident_id, condo_id)
        new_status = IncidentStatus.RESOLVED if incident.status == IncidentStatus.OPEN else IncidentStatus.OPEN

        updated = await repos.incidents.update(incident_id, {"status": new_status})
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.UPDATE_STATUS,
            module=LogModule.INCIDENT,
            target_name=updated.title,
            condo_id=updated.condo_id,
        )
        return updated


async def delete_incident(*, repos: Repositories, actor: User, condo_id: str, incident_id: str) -> None:
    with span("incident_service.delete_incident"):
        require_capability(actor, Capability.DELETE_INCIDENTS)
        incident = await repos.incidents.get_in_condo(incident_id, condo_id)
        await repos.incidents.delete(incident_id)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.DELETE,
            module=LogModule.INCIDENT,
            target_name=incident.title,
            condo_id=incident.condo_id,
        )


async def list_incidents(*, repos: Repositories, condo_id: str) -> list[Incident]:
    """Incidents of a condominium, newest first."""
    with span("incident_service.list_incidents"):
        incidents = await repos.incidents.list_by_condo(condo_id)
        return sorted(incidents, key=lambda incident: incident.timestamp, reverse=True)

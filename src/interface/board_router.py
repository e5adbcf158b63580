"""Incident log, message board and audit trail endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.core.repository import Repositories
from src.domain.create_models import IncidentCreate, MessageCreate
from src.domain.incident import Incident
from src.domain.log import ActivityLog, LogModule
from src.domain.message import Message
from src.domain.user import User
from src.interface.dependencies import get_condo_id, get_current_user, get_repositories
from src.services import activity_log_service, incident_service, message_service


router = APIRouter(tags=["board"])


@router.get("/incidents")
async def list_incidents(
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Incident]:
    return await incident_service.list_incidents(repos=repos, condo_id=condo_id)


@router.post("/incidents", status_code=status.HTTP_201_CREATED)
async def record_incident(
    payload: IncidentCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Incident:
    return await incident_service.record_incident(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        title=payload.title,
        description=payload.description,
        photos=payload.photos,
    )


@router.post("/incidents/{incident_id}/toggle")
async def toggle_incident(
    incident_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Incident:
    """Flip an incident between OPEN and RESOLVED."""
    return await incident_service.toggle_incident_status(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        incident_id=incident_id,
    )


@router.delete("/incidents/{incident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_incident(
    incident_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await incident_service.delete_incident(repos=repos, actor=user, condo_id=condo_id, incident_id=incident_id)


@router.get("/messages")
async def list_messages(
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Message]:
    return await message_service.list_messages(repos=repos, viewer=user, condo_id=condo_id)


@router.post("/messages", status_code=status.HTTP_201_CREATED)
async def post_message(
    payload: MessageCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Message:
    return await message_service.post_message(
        repos=repos,
        sender=user,
        condo_id=condo_id,
        text=payload.text,
        recipient_id=payload.recipient_id,
    )


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await message_service.delete_message(repos=repos, actor=user, condo_id=condo_id, message_id=message_id)


@router.get("/logs")
async def list_logs(
    module: list[LogModule] | None = Query(default=None, description="Only these areas (e.g. VENDOR and BUDGET)"),
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[ActivityLog]:
    """Audit trail of the condominium, newest first."""
    return await activity_log_service.list_entries(repos=repos, viewer=user, condo_id=condo_id, modules=module)

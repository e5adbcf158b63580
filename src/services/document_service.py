"""Condominium document filing."""

import logging

from src.core.clock import utc_now
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.log import LogAction, LogModule
from src.domain.user import User
from src.domain.vendor import CondoDocument
from src.services import activity_log_service


logger = logging.getLogger(__name__)


async def add_document(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    title: str,
    file_url: str,
    category: str = "",
) -> CondoDocument:
    """File a document (regulations, minutes, contracts) for a condominium."""
    with span("document_service.add_document"):
        require_capability(actor, Capability.MANAGE_DOCUMENTS)
        document = await repos.documents.create(
            {
                "title": title.strip(),
                "category": category,
                "file_url": file_url,
                "upload_date": utc_now(),
                "condo_id": condo_id,
            }
        )
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.CREATE,
            module=LogModule.DOCUMENT,
            target_name=document.title,
            condo_id=condo_id,
        )
        return document


async def delete_document(*, repos: Repositories, actor: User, condo_id: str, document_id: str) -> None:
    with span("document_service.delete_document"):
        require_capability(actor, Capability.MANAGE_DOCUMENTS)
        document = await repos.documents.get_in_condo(document_id, condo_id)
        await repos.documents.delete(document_id)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.DELETE,
            module=LogModule.DOCUMENT,
            target_name=document.title,
            condo_id=document.condo_id,
        )


async def list_documents(*, repos: Repositories, condo_id: str) -> list[CondoDocument]:
    """Documents of a condominium, most recent upload first."""
    with span("document_service.list_documents"):
        documents = await repos.documents.list_by_condo(condo_id)
        return sorted(documents, key=lambda document: document.upload_date, reverse=True)

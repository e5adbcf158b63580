"""Vendor (service provider) registry."""

import logging

from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.create_models import AttachmentCreate
from src.domain.log import LogAction, LogModule
from src.domain.update_models import VendorUpdate
from src.domain.user import User
from src.domain.vendor import Vendor
from src.services import activity_log_service
from src.services.attachments import build_attachments


logger = logging.getLogger(__name__)


async def create_vendor(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    name: str,
    tax_id: str = "",
    phone: str = "",
    category: str = "",
    documents: list[AttachmentCreate] | None = None,
) -> Vendor:
    """Register a vendor for a condominium."""
    with span("vendor_service.create_vendor"):
        require_capability(actor, Capability.MANAGE_VENDORS)
        vendor = await repos.vendors.create(
            {
                "name": name.strip(),
                "tax_id": tax_id,
                "phone": phone,
                "category": category,
                "condo_id": condo_id,
                "documents": build_attachments(documents or []),
            }
        )
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.CREATE,
            module=LogModule.VENDOR,
            target_name=vendor.name,
            condo_id=condo_id,
        )
        logger.info("Created vendor %s (%s)", vendor.id, vendor.name)
        return vendor


async def update_vendor(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    vendor_id: str,
    changes: VendorUpdate,
) -> Vendor:
    """Edit vendor details; new documents are appended to the existing ones."""
    with span("vendor_service.update_vendor"):
        require_capability(actor, Capability.MANAGE_VENDORS)
        vendor = await repos.vendors.get_in_condo(vendor_id, condo_id)

        data = changes.model_dump(exclude_unset=True, exclude_none=True, exclude={"documents"})
        if changes.documents:
            data["documents"] = [*vendor.documents, *build_attachments(changes.documents)]
        if not data:
            return vendor

        updated = await repos.vendors.update(vendor_id, data)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.UPDATE,
            module=LogModule.VENDOR,
            target_name=updated.name,
            condo_id=updated.condo_id,
        )
        return updated


async def delete_vendor(*, repos: Repositories, actor: User, condo_id: str, vendor_id: str) -> None:
    """Remove a vendor. Budgets and tasks referencing it are kept."""
    with span("vendor_service.delete_vendor"):
        require_capability(actor, Capability.MANAGE_VENDORS)
        vendor = await repos.vendors.get_in_condo(vendor_id, condo_id)
        await repos.vendors.delete(vendor_id)
        await activity_log_service.record(
            repos=repos,
            actor=actor,
            action=LogAction.DELETE,
            module=LogModule.VENDOR,
            target_name=vendor.name,
            condo_id=vendor.condo_id,
        )


async def list_vendors(*, repos: Repositories, condo_id: str) -> list[Vendor]:
    """Vendors of a condominium, by name."""
    with span("vendor_service.list_vendors"):
        vendors = await repos.vendors.list_by_condo(condo_id)
        return sorted(vendors, key=lambda vendor: vendor.name.lower())

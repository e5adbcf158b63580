"""Administration endpoints: condominiums, team, vendors, budgets, documents and catalogs."""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.budget import Budget, BudgetStatus
from src.domain.catalog import CatalogEntry
from src.domain.condo import Condo
from src.domain.create_models import (
    BudgetCreate,
    CatalogEntryCreate,
    CondoCreate,
    DocumentCreate,
    UserCreate,
    VendorCreate,
)
from src.domain.update_models import BudgetDecision, BudgetUpdate, CondoUpdate, UserUpdate, VendorUpdate
from src.domain.user import User
from src.domain.vendor import CondoDocument, Vendor
from src.interface.auth_router import public_user
from src.interface.dependencies import get_condo_id, get_current_user, get_repositories
from src.services import (
    budget_service,
    catalog_service,
    condo_service,
    document_service,
    user_service,
    vendor_service,
)


router = APIRouter(tags=["facilities"])


# Condominiums


@router.get("/condos")
async def list_condos(
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> list[Condo]:
    """Every condominium for portfolio managers, the home one for everyone else."""
    if user.condo_id and not user.is_manager:
        return [await condo_service.get_condo(repos=repos, condo_id=user.condo_id)]
    return await condo_service.list_condos(repos=repos)


@router.post("/condos", status_code=status.HTTP_201_CREATED)
async def create_condo(
    payload: CondoCreate,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> Condo:
    return await condo_service.create_condo(repos=repos, actor=user, name=payload.name, address=payload.address)


@router.patch("/condos/{condo_id}")
async def update_condo(
    condo_id: str,
    changes: CondoUpdate,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> Condo:
    return await condo_service.update_condo(repos=repos, actor=user, condo_id=condo_id, changes=changes)


@router.delete("/condos/{condo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_condo(
    condo_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await condo_service.delete_condo(repos=repos, actor=user, condo_id=condo_id)


# Team


@router.get("/users")
async def list_users(
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[dict[str, Any]]:
    require_capability(user, Capability.VIEW_TEAM)
    return [public_user(member) for member in await user_service.list_users(repos=repos, condo_id=condo_id)]


@router.get("/users/workers")
async def list_workers(
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[dict[str, Any]]:
    """Members tasks can be assigned to."""
    workers = await user_service.list_assignable_workers(repos=repos, condo_id=condo_id)
    return [public_user(worker) for worker in workers]


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    fields = payload.model_dump()
    fields["condo_id"] = fields["condo_id"] or condo_id
    created = await user_service.create_user(repos=repos, actor=user, **fields)
    return public_user(created)


@router.patch("/users/{user_id}")
async def update_user(
    user_id: str,
    changes: UserUpdate,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    updated = await user_service.update_user(repos=repos, actor=user, user_id=user_id, changes=changes)
    return public_user(updated)


@router.post("/users/{user_id}/toggle-active")
async def toggle_user_active(
    user_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    return public_user(await user_service.toggle_active(repos=repos, actor=user, user_id=user_id))


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    user: User = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await user_service.delete_user(repos=repos, actor=user, user_id=user_id)


# Vendors


@router.get("/vendors")
async def list_vendors(
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Vendor]:
    return await vendor_service.list_vendors(repos=repos, condo_id=condo_id)


@router.post("/vendors", status_code=status.HTTP_201_CREATED)
async def create_vendor(
    payload: VendorCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Vendor:
    return await vendor_service.create_vendor(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        name=payload.name,
        tax_id=payload.tax_id,
        phone=payload.phone,
        category=payload.category,
        documents=payload.documents,
    )


@router.patch("/vendors/{vendor_id}")
async def update_vendor(
    vendor_id: str,
    changes: VendorUpdate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Vendor:
    return await vendor_service.update_vendor(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        vendor_id=vendor_id,
        changes=changes,
    )


@router.delete("/vendors/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(
    vendor_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await vendor_service.delete_vendor(repos=repos, actor=user, condo_id=condo_id, vendor_id=vendor_id)


# Budgets


@router.get("/budgets")
async def list_budgets(
    budget_status: BudgetStatus | None = Query(default=None, alias="status"),
    vendor_id: str | None = Query(default=None, description="Only quotations from this vendor"),
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[Budget]:
    require_capability(user, Capability.MANAGE_BUDGETS)
    return await budget_service.list_budgets(
        repos=repos,
        condo_id=condo_id,
        status=budget_status,
        vendor_id=vendor_id,
    )


@router.post("/budgets", status_code=status.HTTP_201_CREATED)
async def create_budget(
    payload: BudgetCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Budget:
    return await budget_service.create_budget(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        title=payload.title,
        description=payload.description,
        vendor_id=payload.vendor_id,
        value=payload.value,
        items=payload.items,
        status=payload.status,
        documents=payload.documents,
    )


@router.patch("/budgets/{budget_id}")
async def update_budget(
    budget_id: str,
    changes: BudgetUpdate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Budget:
    return await budget_service.update_budget(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        budget_id=budget_id,
        changes=changes,
    )


@router.post("/budgets/{budget_id}/decision")
async def decide_budget(
    budget_id: str,
    decision: BudgetDecision,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> Budget:
    """Quick approve / reject of a pending quotation."""
    return await budget_service.decide_budget(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        budget_id=budget_id,
        status=BudgetStatus(decision.status),
    )


@router.delete("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await budget_service.delete_budget(repos=repos, actor=user, condo_id=condo_id, budget_id=budget_id)


# Documents


@router.get("/documents")
async def list_documents(
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> list[CondoDocument]:
    return await document_service.list_documents(repos=repos, condo_id=condo_id)


@router.post("/documents", status_code=status.HTTP_201_CREATED)
async def add_document(
    payload: DocumentCreate,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> CondoDocument:
    return await document_service.add_document(
        repos=repos,
        actor=user,
        condo_id=condo_id,
        title=payload.title,
        file_url=payload.file_url,
        category=payload.category,
    )


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    user: User = Depends(get_current_user),
    condo_id: str = Depends(get_condo_id),
    repos: Repositories = Depends(get_repositories),
) -> None:
    await document_service.delete_document(repos=repos, actor=user, condo_id=condo_id, document_id=document_id)


# Catalogs

_CATALOG_PATHS = {"categories": catalog_service.CATEGORIES, "job-functions": catalog_service.JOB_FUNCTIONS}


def _register_catalog_routes(path: str, kind: str) -> None:
    @router.get(f"/{path}", name=f"list_{kind}")
    async def list_entries(
        _user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ) -> list[CatalogEntry]:
        return await catalog_service.list_entries(repos=repos, kind=kind)

    @router.post(f"/{path}", name=f"add_{kind}", status_code=status.HTTP_201_CREATED)
    async def add_entry(
        payload: CatalogEntryCreate,
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ) -> CatalogEntry:
        return await catalog_service.add_entry(repos=repos, actor=user, kind=kind, name=payload.name)

    @router.delete(f"/{path}/{{entry_id}}", name=f"remove_{kind}", status_code=status.HTTP_204_NO_CONTENT)
    async def remove_entry(
        entry_id: str,
        user: User = Depends(get_current_user),
        repos: Repositories = Depends(get_repositories),
    ) -> None:
        await catalog_service.remove_entry(repos=repos, actor=user, kind=kind, entry_id=entry_id)


for _path, _kind in _CATALOG_PATHS.items():
    _register_catalog_routes(_path, _kind)

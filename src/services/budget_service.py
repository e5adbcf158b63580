"""Budget (vendor quotation) service."""

import logging
from typing import Any

from src.core.clock import utc_now
from src.core.logging import span
from src.core.permissions import Capability, require_capability
from src.core.repository import Repositories
from src.domain.budget import Budget, BudgetItem, BudgetStatus, items_total
from src.domain.create_models import AttachmentCreate, BudgetItemCreate
from src.domain.log import LogAction, LogModule
from src.domain.update_models import BudgetUpdate
from src.domain.user import User
from src.services import activity_log_service
from src.services.attachments import build_attachments, new_id


logger = logging.getLogger(__name__)


def build_items(items: list[BudgetItemCreate]) -> list[BudgetItem]:
    """Give each quoted line an ID."""
    return [BudgetItem(id=new_id(), **item.model_dump()) for item in items]


def compute_value(items: list[BudgetItem], value: float | None) -> float | None:
    """Budget total: the sum of the items when there are any, else the typed value."""
    if items:
        return items_total(items)
    return value


async def _log(repos: Repositories, actor: User, action: LogAction, budget: Budget) -> None:
    await activity_log_service.record(
        repos=repos,
        actor=actor,
        action=action,
        module=LogModule.BUDGET,
        target_name=budget.title,
        condo_id=budget.condo_id,
    )


async def create_budget(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    title: str,
    description: str = "",
    vendor_id: str | None = None,
    value: float | None = None,
    items: list[BudgetItemCreate] | None = None,
    status: BudgetStatus = BudgetStatus.PENDING,
    documents: list[AttachmentCreate] | None = None,
) -> Budget:
    """Register a quotation.

    Args:
        repos: Repository bundle
        actor: User registering the quotation
        condo_id: Owning condominium
        title: Budget title
        description: Scope of the quotation
        vendor_id: Quoting vendor
        value: Total value, ignored when items are given
        items: Quoted line items
        status: Initial status
        documents: Quotation files

    Returns:
        The created budget
    """
    with span("budget_service.create_budget"):
        require_capability(actor, Capability.MANAGE_BUDGETS)
        line_items = build_items(items or [])
        budget = await repos.budgets.create(
            {
                "title": title.strip(),
                "description": description,
                "status": status,
                "vendor_id": vendor_id or None,
                "value": compute_value(line_items, value),
                "items": line_items,
                "condo_id": condo_id,
                "created_at": utc_now(),
                "documents": build_attachments(documents or []),
            }
        )
        await _log(repos, actor, LogAction.CREATE, budget)
        logger.info("Created budget %s worth %s", budget.id, budget.value)
        return budget


async def update_budget(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    budget_id: str,
    changes: BudgetUpdate,
) -> Budget:
    """Edit a quotation; the value is recomputed whenever items are present."""
    with span("budget_service.update_budget"):
        require_capability(actor, Capability.MANAGE_BUDGETS)
        budget = await repos.budgets.get_in_condo(budget_id, condo_id)

        data: dict[str, Any] = changes.model_dump(
            exclude_unset=True,
            exclude_none=True,
            exclude={"items", "documents", "value"},
        )
        items = build_items(changes.items) if changes.items is not None else budget.items
        if changes.items is not None:
            data["items"] = items
        if changes.items is not None or changes.value is not None:
            data["value"] = compute_value(items, changes.value if changes.value is not None else budget.value)
        if changes.documents:
            data["documents"] = [*budget.documents, *build_attachments(changes.documents)]
        if not data:
            return budget

        updated = await repos.budgets.update(budget_id, data)
        await _log(repos, actor, LogAction.UPDATE, updated)
        return updated


async def decide_budget(
    *,
    repos: Repositories,
    actor: User,
    condo_id: str,
    budget_id: str,
    status: BudgetStatus,
) -> Budget:
    """Approve or reject a pending quotation.

    Raises:
        ValueError: If the budget was already decided or the status is not a decision
    """
    with span("budget_service.decide_budget"):
        require_capability(actor, Capability.MANAGE_BUDGETS)
        if status not in (BudgetStatus.APPROVED, BudgetStatus.REJECTED):
            msg = f"Cannot decide a budget as {status}"
            raise ValueError(msg)

        budget = await repos.budgets.get_in_condo(budget_id, condo_id)
        if budget.status != BudgetStatus.PENDING:
            msg = f"Cannot decide budget {budget_id}: it is already {budget.status}"
            raise ValueError(msg)

        updated = await repos.budgets.update(budget_id, {"status": status})
        await _log(repos, actor, LogAction.UPDATE_STATUS, updated)
        logger.info("Budget %s marked %s", budget_id, status)
        return updated


async def delete_budget(*, repos: Repositories, actor: User, condo_id: str, budget_id: str) -> None:
    with span("budget_service.delete_budget"):
        require_capability(actor, Capability.MANAGE_BUDGETS)
        budget = await repos.budgets.get_in_condo(budget_id, condo_id)
        await repos.budgets.delete(budget_id)
        await _log(repos, actor, LogAction.DELETE, budget)


async def list_budgets(
    *,
    repos: Repositories,
    condo_id: str,
    status: BudgetStatus | None = None,
    vendor_id: str | None = None,
) -> list[Budget]:
    """Quotations of a condominium, newest first, optionally by status and quoting vendor."""
    with span("budget_service.list_budgets"):
        budgets = await repos.budgets.list_by_condo(condo_id)
        if status is not None:
            budgets = [budget for budget in budgets if budget.status == status]
        if vendor_id:
            budgets = [budget for budget in budgets if budget.vendor_id == vendor_id]
        return sorted(budgets, key=lambda budget: budget.created_at, reverse=True)

"""Role capability table and navigation menu."""

import logging
from enum import StrEnum

from pydantic import BaseModel

from src.domain.user import User, UserRole


logger = logging.getLogger(__name__)


class Capability(StrEnum):
    """An action a role may be permitted to perform."""

    VIEW_DASHBOARD = "view_dashboard"
    VIEW_TASKS = "view_tasks"
    VIEW_SCHEDULE = "view_schedule"
    VIEW_REPORTS = "view_reports"
    POST_MESSAGES = "post_messages"

    VIEW_ALL_TASKS = "view_all_tasks"
    MANAGE_TASKS = "manage_tasks"
    REOPEN_TASK = "reopen_task"
    MANAGE_CATEGORIES = "manage_categories"

    SWITCH_CONDO = "switch_condo"
    MANAGE_CONDOS = "manage_condos"
    VIEW_TEAM = "view_team"
    MANAGE_USERS = "manage_users"
    MANAGE_VENDORS = "manage_vendors"
    MANAGE_BUDGETS = "manage_budgets"
    MANAGE_DOCUMENTS = "manage_documents"

    RECORD_INCIDENTS = "record_incidents"
    DELETE_INCIDENTS = "delete_incidents"

    DIRECT_MESSAGE = "direct_message"
    DELETE_MESSAGES = "delete_messages"

    GENERATE_REPORTS = "generate_reports"
    VIEW_AUDIT_LOG = "view_audit_log"


_EVERYONE: frozenset[Capability] = frozenset(
    {
        Capability.VIEW_DASHBOARD,
        Capability.VIEW_TASKS,
        Capability.VIEW_SCHEDULE,
        Capability.VIEW_REPORTS,
        Capability.POST_MESSAGES,
    }
)

_SUPERVISION: frozenset[Capability] = frozenset(
    {
        Capability.MANAGE_TASKS,
        Capability.MANAGE_CATEGORIES,
        Capability.RECORD_INCIDENTS,
        Capability.VIEW_TEAM,
    }
)

_MANAGEMENT: frozenset[Capability] = frozenset(
    {
        Capability.VIEW_ALL_TASKS,
        Capability.REOPEN_TASK,
        Capability.SWITCH_CONDO,
        Capability.MANAGE_CONDOS,
        Capability.MANAGE_USERS,
        Capability.MANAGE_VENDORS,
        Capability.MANAGE_BUDGETS,
        Capability.MANAGE_DOCUMENTS,
        Capability.DELETE_INCIDENTS,
        Capability.DIRECT_MESSAGE,
        Capability.DELETE_MESSAGES,
        Capability.GENERATE_REPORTS,
        Capability.VIEW_AUDIT_LOG,
    }
)

ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.SINDICO: _EVERYONE | _SUPERVISION | _MANAGEMENT,
    UserRole.GESTOR: _EVERYONE | _SUPERVISION | _MANAGEMENT,
    UserRole.ZELADOR: _EVERYONE | _SUPERVISION,
    UserRole.LIMPEZA: _EVERYONE,
    UserRole.PORTEIRO: _EVERYONE,
}


def has_capability(role: UserRole, capability: Capability) -> bool:
    """Return True if the role is permitted to perform the action."""
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def require_capability(user: User, capability: Capability) -> None:
    """Raise PermissionError unless the user's role grants the capability."""
    if not has_capability(user.role, capability):
        logger.warning(
            "permission_denied",
            extra={"user_id": user.id, "role": str(user.role), "capability": str(capability)},
        )
        msg = f"Permission denied: role {user.role} cannot {capability.value.replace('_', ' ')}"
        raise PermissionError(msg)


class MenuItem(BaseModel):
    """Navigation entry."""

    id: str
    label: str
    capability: Capability


MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem(id="dashboard", label="Home", capability=Capability.VIEW_DASHBOARD),
    MenuItem(id="condos", label="Condominiums", capability=Capability.MANAGE_CONDOS),
    MenuItem(id="procurement", label="Procurement", capability=Capability.MANAGE_BUDGETS),
    MenuItem(id="reports", label="Reports & AI", capability=Capability.VIEW_REPORTS),
    MenuItem(id="users", label="Team", capability=Capability.VIEW_TEAM),
    MenuItem(id="tasks", label="Checklist", capability=Capability.VIEW_TASKS),
    MenuItem(id="schedule", label="Schedule", capability=Capability.VIEW_SCHEDULE),
    MenuItem(id="messages", label="Message board", capability=Capability.POST_MESSAGES),
)


def menu_for(role: UserRole) -> list[MenuItem]:
    """Navigation entries visible to a role, in display order."""
    return [item for item in MENU_ITEMS if has_capability(role, item.capability)]

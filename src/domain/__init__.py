"""Domain models and DTOs."""

from src.domain.budget import Budget, BudgetItem, BudgetStatus
from src.domain.catalog import CatalogEntry
from src.domain.condo import Condo
from src.domain.incident import Incident, IncidentStatus
from src.domain.log import ActivityLog, LogAction, LogModule
from src.domain.message import Message
from src.domain.task import Task, TaskFrequency, TaskStatus
from src.domain.user import User, UserRole
from src.domain.vendor import Attachment, CondoDocument, Vendor


__all__ = [
    "ActivityLog",
    "Attachment",
    "Budget",
    "BudgetItem",
    "BudgetStatus",
    "CatalogEntry",
    "Condo",
    "CondoDocument",
    "Incident",
    "IncidentStatus",
    "LogAction",
    "LogModule",
    "Message",
    "Task",
    "TaskFrequency",
    "TaskStatus",
    "User",
    "UserRole",
    "Vendor",
]

"""Log domain models for audit trail."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class LogAction(StrEnum):
    """Action recorded in the audit trail."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    START = "START"
    COMPLETE = "COMPLETE"
    REOPEN = "REOPEN"
    UPDATE_STATUS = "UPDATE_STATUS"


class LogModule(StrEnum):
    """Area of the application an audit entry refers to."""

    TASK = "TASK"
    INCIDENT = "INCIDENT"
    BUDGET = "BUDGET"
    VENDOR = "VENDOR"
    DOCUMENT = "DOCUMENT"
    USER = "USER"
    CONDO = "CONDO"
    MESSAGE = "MESSAGE"


class ActivityLog(BaseModel):
    """Audit trail entry data transfer object."""

    id: str = Field(..., description="Unique log ID from database")
    user_id: str = Field(..., description="ID of user who performed the action")
    user_name: str = Field(..., description="Name of user who performed the action")
    action: LogAction = Field(..., description="Action performed")
    module: LogModule = Field(..., description="Area the action touched")
    target_name: str = Field(..., description="Title or name of the affected record")
    timestamp: datetime = Field(..., description="When the action occurred")
    condo_id: str = Field(..., description="Condominium the action belongs to")

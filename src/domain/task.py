"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from src.core.clock import ensure_aware


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskFrequency(StrEnum):
    """Recurrence policy deciding on which days a task shows up."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    ONCE = "ONCE"


class Task(BaseModel):
    """Task data transfer object."""

    id: str = Field(..., description="Unique task ID from database")
    title: str = Field(..., description="Task title (e.g., 'Clean the pool')")
    description: str = Field(default="", description="Detailed task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current lifecycle status")
    frequency: TaskFrequency = Field(default=TaskFrequency.DAILY, description="Recurrence policy")
    created_at: datetime = Field(..., description="When the task was created")
    scheduled_for: datetime = Field(..., description="Start date of the task (or its only date for one-off tasks)")
    completed_at: datetime | None = Field(default=None, description="When the task was last completed")
    assigned_to: str = Field(default="", description="User or vendor ID responsible for the task")
    assigned_name: str = Field(default="", description="Display name of the assignee at save time")
    category: str = Field(default="", description="Free-text category tag")
    photos: list[str] = Field(default_factory=list, description="Photo evidence (opaque data URLs)")
    completion_observation: str | None = Field(default=None, description="Note left by the assignee on completion")
    condo_id: str = Field(..., description="Owning condominium ID")

    @property
    def is_recurring(self) -> bool:
        """Whether the task repeats (the "permanent" checklist items)."""
        return self.frequency != TaskFrequency.ONCE

    @field_validator("created_at", "scheduled_for", "completed_at")
    @classmethod
    def attach_local_timezone(cls, v: datetime | None) -> datetime | None:
        """Read naive timestamps (date-only input, old rows) as condominium-local time."""
        return ensure_aware(v) if v is not None else None

"""Update models for database operations."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.core.clock import ensure_aware
from src.domain.create_models import AttachmentCreate, BudgetItemCreate
from src.domain.task import TaskFrequency
from src.domain.user import UserRole


class TaskUpdate(BaseModel):
    """Editable task fields (status is changed only through transitions)."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    frequency: TaskFrequency | None = None
    scheduled_for: datetime | None = None
    category: str | None = None
    assigned_to: str | None = None
    photos: list[str] | None = None

    @field_validator("scheduled_for")
    @classmethod
    def validate_scheduled_for(cls, v: datetime | None) -> datetime | None:
        """Treat a date given without an offset as condominium-local."""
        return ensure_aware(v) if v is not None else None


class UserUpdate(BaseModel):
    """Editable user fields."""

    name: str | None = Field(default=None, min_length=3)
    password: str | None = Field(default=None, min_length=1)
    role: UserRole | None = None
    job_title: str | None = None
    email: str | None = None
    avatar: str | None = None
    condo_id: str | None = None


class CondoUpdate(BaseModel):
    """Editable condominium fields."""

    name: str | None = Field(default=None, min_length=1)
    address: str | None = None


class VendorUpdate(BaseModel):
    """Editable vendor fields."""

    name: str | None = Field(default=None, min_length=1)
    tax_id: str | None = None
    phone: str | None = None
    category: str | None = None
    documents: list[AttachmentCreate] | None = None


class BudgetUpdate(BaseModel):
    """Editable budget fields."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    vendor_id: str | None = None
    value: float | None = Field(default=None, ge=0)
    items: list[BudgetItemCreate] | None = None
    documents: list[AttachmentCreate] | None = None


class BudgetDecision(BaseModel):
    """Quick approve / reject of a pending budget."""

    status: Literal["APPROVED", "REJECTED"]

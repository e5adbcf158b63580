"""Pydantic models for creating records in database."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.core.clock import ensure_aware
from src.core.config import constants
from src.domain.budget import BudgetStatus
from src.domain.task import TaskFrequency
from src.domain.user import UserRole


class TaskCreate(BaseModel):
    """Payload for scheduling one or more tasks."""

    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Detailed task description")
    frequency: TaskFrequency = Field(default=TaskFrequency.DAILY, description="Recurrence policy")
    scheduled_dates: list[datetime] = Field(
        ...,
        min_length=1,
        description="Dates to schedule; only one-off tasks use more than the first",
    )
    category: str = Field(default="", description="Category tag")
    assigned_to: str = Field(default="", description="User or vendor ID")
    photos: list[str] = Field(default_factory=list, description="Reference photos")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank titles."""
        v = v.strip()
        if not v:
            raise ValueError("Title must not be empty")
        return v

    @field_validator("scheduled_dates")
    @classmethod
    def validate_scheduled_dates(cls, v: list[datetime]) -> list[datetime]:
        """Treat dates given without an offset as condominium-local."""
        return [ensure_aware(value) for value in v]


class TaskCompletion(BaseModel):
    """Payload submitted when the assignee finishes a task."""

    photos: list[str] = Field(default_factory=list, description="Photos staged as evidence")
    observation: str | None = Field(default=None, description="Optional completion note")
    confirmed: bool = Field(default=False, description="Second confirmation of the completion")


class UserCreate(BaseModel):
    """Pydantic model for creating a user record."""

    name: str = Field(..., description="Display and login name")
    password: str = Field(..., min_length=1, description="Plain-text password (hashed before storage)")
    role: UserRole = Field(default=UserRole.ZELADOR, description="Role inside the condominium")
    job_title: str | None = Field(default=None, description="Custom job function label")
    email: str = Field(default="", description="Contact email")
    avatar: str | None = Field(default=None, description="Avatar image (data URL)")
    condo_id: str | None = Field(default=None, description="Home condominium")

    @field_validator("name")
    @classmethod
    def validate_name_length(cls, v: str) -> str:
        """Validate name is long enough to be used as a login name."""
        v = v.strip()
        if len(v) < constants.MIN_USERNAME_LENGTH:
            msg = f"Name must have at least {constants.MIN_USERNAME_LENGTH} characters"
            raise ValueError(msg)
        return v


class CondoCreate(BaseModel):
    """Pydantic model for creating a condominium record."""

    name: str = Field(..., min_length=1, description="Condominium name")
    address: str = Field(default="", description="Street address")


class AttachmentCreate(BaseModel):
    """File to attach to a vendor or a budget."""

    name: str = Field(..., min_length=1, description="File name")
    url: str = Field(..., min_length=1, description="File content (data URL) or link")


class VendorCreate(BaseModel):
    """Pydantic model for creating a vendor record."""

    name: str = Field(..., min_length=1, description="Vendor name")
    tax_id: str = Field(default="", description="CNPJ or CPF")
    phone: str = Field(default="", description="Contact phone")
    category: str = Field(default="", description="Kind of service provided")
    documents: list[AttachmentCreate] = Field(default_factory=list, description="Files to attach")


class BudgetItemCreate(BaseModel):
    """A quoted line item."""

    description: str = Field(default="", description="What is being quoted")
    quantity: float = Field(default=1, ge=0, description="Quantity")
    unit_price: float = Field(default=0, ge=0, description="Price per unit")


class BudgetCreate(BaseModel):
    """Pydantic model for creating a budget record."""

    title: str = Field(..., min_length=1, description="Budget title")
    description: str = Field(default="", description="Scope of the quotation")
    vendor_id: str | None = Field(default=None, description="Quoting vendor ID")
    value: float | None = Field(default=None, ge=0, description="Total value when no items are given")
    items: list[BudgetItemCreate] = Field(default_factory=list, description="Quoted line items")
    status: BudgetStatus = Field(default=BudgetStatus.PENDING, description="Initial status")
    documents: list[AttachmentCreate] = Field(default_factory=list, description="Quotation files")


class DocumentCreate(BaseModel):
    """Pydantic model for filing a condominium document."""

    title: str = Field(..., min_length=1, description="Document title")
    category: str = Field(default="", description="Document category")
    file_url: str = Field(..., min_length=1, description="File content (data URL) or link")


class IncidentCreate(BaseModel):
    """Pydantic model for recording an incident."""

    title: str = Field(..., min_length=1, description="Short incident title")
    description: str = Field(default="", description="What happened")
    photos: list[str] = Field(default_factory=list, description="Photo evidence")


class MessageCreate(BaseModel):
    """Pydantic model for posting to the message board."""

    text: str = Field(..., min_length=1, description="Message body")
    recipient_id: str | None = Field(default=None, description="Recipient for a direct message")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject whitespace-only messages."""
        v = v.strip()
        if not v:
            raise ValueError("Message must not be empty")
        return v


class CatalogEntryCreate(BaseModel):
    """Name of a category or job function to add."""

    name: str = Field(..., description="Entry label")

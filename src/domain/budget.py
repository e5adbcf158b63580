"""Budget (vendor quotation) domain models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from src.domain.vendor import Attachment


class BudgetStatus(StrEnum):
    """Approval status of a quotation."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class BudgetItem(BaseModel):
    """A quoted line item."""

    id: str = Field(..., description="Line item ID")
    description: str = Field(default="", description="What is being quoted")
    quantity: float = Field(default=1, ge=0, description="Quantity")
    unit_price: float = Field(default=0, ge=0, description="Price per unit")

    @property
    def total(self) -> float:
        """Line total."""
        return self.quantity * self.unit_price


class Budget(BaseModel):
    """Quotation data transfer object."""

    id: str = Field(..., description="Unique budget ID from database")
    title: str = Field(..., description="Budget title")
    description: str = Field(default="", description="Scope of the quotation")
    status: BudgetStatus = Field(default=BudgetStatus.PENDING, description="Approval status")
    vendor_id: str | None = Field(default=None, description="Quoting vendor ID")
    value: float | None = Field(default=None, description="Total value")
    items: list[BudgetItem] = Field(default_factory=list, description="Quoted line items")
    condo_id: str = Field(..., description="Owning condominium ID")
    created_at: datetime = Field(..., description="When the quotation was registered")
    documents: list[Attachment] = Field(default_factory=list, description="Quotation files")


def items_total(items: list[BudgetItem]) -> float:
    """Sum of quantity x unit price across all items."""
    return sum(item.total for item in items)

"""Condominium domain model."""

from datetime import datetime

from pydantic import BaseModel, Field


class Condo(BaseModel):
    """Condominium data transfer object."""

    id: str = Field(..., description="Unique condominium ID from database")
    name: str = Field(..., description="Condominium name")
    address: str = Field(default="", description="Street address")
    created_at: datetime = Field(..., description="When the condominium was registered")

"""Incident log domain models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class IncidentStatus(StrEnum):
    """Incident status (binary toggle)."""

    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


class Incident(BaseModel):
    """Incident log entry data transfer object."""

    id: str = Field(..., description="Unique incident ID from database")
    condo_id: str = Field(..., description="Condominium where the incident happened")
    user_id: str = Field(..., description="ID of the user who recorded the incident")
    user_name: str = Field(..., description="Name of the user who recorded the incident")
    title: str = Field(..., description="Short incident title")
    description: str = Field(default="", description="What happened")
    timestamp: datetime = Field(..., description="When the incident was recorded")
    status: IncidentStatus = Field(default=IncidentStatus.OPEN, description="Open or resolved")
    photos: list[str] = Field(default_factory=list, description="Photo evidence (opaque data URLs)")

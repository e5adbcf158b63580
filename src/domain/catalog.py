"""Named catalog entries (task categories and job functions)."""

from pydantic import BaseModel, Field


class CatalogEntry(BaseModel):
    """A unique named entry."""

    id: str = Field(..., description="Unique entry ID from database")
    name: str = Field(..., description="Entry label")

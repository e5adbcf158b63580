"""Message board domain model."""

from datetime import datetime

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Message board entry."""

    id: str = Field(..., description="Unique message ID from database")
    sender_id: str = Field(..., description="Author user ID")
    sender_name: str = Field(..., description="Author name")
    recipient_id: str | None = Field(default=None, description="Recipient user ID for direct messages")
    recipient_name: str | None = Field(default=None, description="Recipient name for direct messages")
    text: str = Field(..., description="Message body")
    timestamp: datetime = Field(..., description="When the message was posted")
    condo_id: str = Field(..., description="Condominium board the message belongs to")
    broadcast: bool = Field(default=True, description="Whether the whole condominium can read it")

"""Helpers for files attached to vendors and budgets."""

import uuid

from src.core.clock import utc_now
from src.domain.create_models import AttachmentCreate
from src.domain.vendor import Attachment


def new_id() -> str:
    """Opaque ID for embedded records (attachments, budget items)."""
    return uuid.uuid4().hex[:12]


def build_attachments(files: list[AttachmentCreate]) -> list[Attachment]:
    """Stamp uploaded files with an ID and upload date."""
    uploaded_at = utc_now()
    return [Attachment(id=new_id(), name=file.name, url=file.url, upload_date=uploaded_at) for file in files]

"""Vendor and document domain models."""

from datetime import datetime

from pydantic import BaseModel, Field


class Attachment(BaseModel):
    """File attached to a vendor or a budget."""

    id: str = Field(..., description="Attachment ID")
    name: str = Field(..., description="Original file name")
    url: str = Field(..., description="File content (data URL) or link")
    upload_date: datetime = Field(..., description="When the file was attached")


class Vendor(BaseModel):
    """Service provider data transfer object."""

    id: str = Field(..., description="Unique vendor ID from database")
    name: str = Field(..., description="Vendor name")
    tax_id: str = Field(default="", description="CNPJ or CPF")
    phone: str = Field(default="", description="Contact phone")
    category: str = Field(default="", description="Kind of service provided")
    condo_id: str = Field(..., description="Condominium the vendor works for")
    documents: list[Attachment] = Field(default_factory=list, description="Contracts and certificates")


class CondoDocument(BaseModel):
    """Document filed for a condominium."""

    id: str = Field(..., description="Unique document ID from database")
    title: str = Field(..., description="Document title")
    category: str = Field(default="", description="Document category")
    file_url: str = Field(..., description="File content (data URL) or link")
    upload_date: datetime = Field(..., description="When the document was filed")
    condo_id: str = Field(..., description="Owning condominium ID")

"""
Contact Pydantic Schemas.

``contact_type`` is accepted as a plain string so that an unknown type is
reported with the same 400 error as a malformed value.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import ContactType


class ContactInfoCreate(BaseModel):
    contact_type: str = Field(..., description="'email' or 'mobile'")
    contact_value: str = Field(..., max_length=255)
    description: str | None = None
    is_active: bool = True


class ContactInfoUpdate(BaseModel):
    contact_type: str | None = None
    contact_value: str | None = Field(default=None, max_length=255)
    description: str | None = None
    is_active: bool | None = None


class ContactInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contact_type: ContactType
    contact_value: str
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ContactFormRequest(BaseModel):
    """Message sent through the public contact form."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$", max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)


class ContactFormResponse(BaseModel):
    received: bool = True
    name: str
    email: str

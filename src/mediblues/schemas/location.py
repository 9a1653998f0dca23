"""
Location Pydantic Schemas.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import DoctorAvailability
from .common import DepartmentRef


class LocationBase(BaseModel):
    """Base schema for location data."""

    name: str = Field(..., min_length=1, max_length=255, description="Branch name (unique)")
    address: str = Field(..., min_length=1, description="Street address")
    phone: str = Field(..., min_length=1, max_length=50, description="Branch phone number")
    email: str = Field(..., min_length=1, max_length=255, description="Branch email")


class LocationCreate(LocationBase):
    """Schema for creating a location (admin)."""

    enabled: bool = True


class LocationUpdate(BaseModel):
    """Partial update; only provided fields change."""

    name: str | None = Field(default=None, max_length=255)
    address: str | None = None
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    enabled: bool | None = None


class LocationDoctor(BaseModel):
    """Doctor summary shown on a location."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str | None
    experience: int | None
    availability: DoctorAvailability


class LocationSimpleResponse(LocationBase):
    """Location without relations (dropdowns, nested views)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    enabled: bool
    created_at: datetime
    updated_at: datetime


class LocationResponse(LocationSimpleResponse):
    """Location with its doctors and departments."""

    doctors: list[LocationDoctor] = Field(default_factory=list)
    departments: list[DepartmentRef] = Field(default_factory=list)

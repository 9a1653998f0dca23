"""
Doctor Pydantic Schemas.

Specialization rows are exposed as a plain list of strings.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.enums import DoctorAvailability
from .common import DepartmentRef


class DoctorCreate(BaseModel):
    """Schema for creating a doctor (admin)."""

    name: str = Field(..., min_length=1, max_length=255)
    qualifications: list[str] = Field(default_factory=list)
    experience: int | None = Field(default=None, ge=0, description="Years of experience")
    image: str | None = Field(default=None, max_length=500)
    availability: DoctorAvailability = DoctorAvailability.AVAILABLE
    location_id: int = Field(..., description="Location the doctor practises at")
    department_ids: list[int] | None = Field(
        default=None,
        description="Departments to link; unknown ids are ignored",
    )
    specializations: list[str] | None = None


class DoctorUpdate(BaseModel):
    """Partial update; given association lists replace the stored ones."""

    name: str | None = Field(default=None, max_length=255)
    qualifications: list[str] | None = None
    experience: int | None = Field(default=None, ge=0)
    image: str | None = Field(default=None, max_length=500)
    availability: DoctorAvailability | None = None
    location_id: int | None = None
    department_ids: list[int] | None = None
    specializations: list[str] | None = None


class DoctorLocation(BaseModel):
    """Location details embedded in a doctor response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    phone: str
    email: str


class DoctorResponse(BaseModel):
    """Doctor with location, departments and specializations."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    qualifications: list[str]
    experience: int | None
    image: str | None
    availability: DoctorAvailability
    location_id: int
    location: DoctorLocation | None
    departments: list[DepartmentRef] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("specializations", mode="before")
    @classmethod
    def flatten_specializations(cls, value: Any) -> Any:
        if value is None:
            return []
        return [getattr(item, "specialization", item) for item in value]

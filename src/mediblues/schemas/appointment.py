"""
Appointment Pydantic Schemas.

Booking fields are all optional at the schema level: which ones are
required depends on whether a ``package_id`` is given, and that check
lives in the repository.
"""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import AppointmentStatus, AppointmentType
from .common import DepartmentRef, DoctorRef, LocationRef, PackageRef


class AppointmentCreate(BaseModel):
    """Public booking request (normal consultation or package booking)."""

    full_name: str | None = Field(default=None, max_length=255)
    mobile_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    location_id: int | None = None
    location: str | None = Field(default=None, description="Location name, used when location_id is absent")
    department_id: int | None = None
    department: str | None = Field(default=None, description="Department name; unknown names are ignored")
    doctor_id: int | None = None
    doctor: str | None = Field(default=None, description="Doctor name; unknown names are ignored")
    reason_for_visit: str | None = None
    message: str | None = None
    notes: str | None = Field(default=None, description="Package bookings: stored as the message")
    preferred_date: date | None = None
    preferred_time: str | None = Field(default=None, max_length=50)
    package_id: int | None = Field(default=None, description="Set for health-check package bookings")


class AppointmentUpdate(BaseModel):
    """Partial update (admin)."""

    full_name: str | None = Field(default=None, max_length=255)
    mobile_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    location_id: int | None = None
    location: str | None = None
    department_id: int | None = None
    department: str | None = None
    doctor_id: int | None = None
    doctor: str | None = None
    reason_for_visit: str | None = None
    message: str | None = None
    preferred_date: date | None = None
    preferred_time: str | None = Field(default=None, max_length=50)
    status: AppointmentStatus | None = None


class AppointmentResponse(BaseModel):
    """Appointment with its related rows."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: AppointmentType
    status: AppointmentStatus
    full_name: str
    mobile_number: str
    email: str | None
    location_id: int | None
    department_id: int | None
    doctor_id: int | None
    package_id: int | None
    reason_for_visit: str | None
    message: str | None
    preferred_date: date | None
    preferred_time: str | None
    location: LocationRef | None
    department: DepartmentRef | None
    doctor: DoctorRef | None
    package: PackageRef | None
    created_at: datetime
    updated_at: datetime

"""
Dashboard statistics schema.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    total_appointments: int
    appointments_by_status: dict[str, int] = Field(
        description="Counts for pending, confirmed, completed and cancelled"
    )
    total_locations: int
    total_departments: int
    total_doctors: int
    total_packages: int

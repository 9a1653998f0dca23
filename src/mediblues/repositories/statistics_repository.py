"""
Statistics Repository.

Read-only counts for the admin dashboard.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.appointment import Appointment
from ..models.department import Department
from ..models.doctor import Doctor
from ..models.enums import AppointmentStatus
from ..models.location import Location
from ..models.package import Package


class StatisticsRepository:
    """Aggregate counts across the directory."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _count(self, model: type) -> int:
        result = await self.session.execute(select(func.count()).select_from(model))
        return result.scalar_one()

    async def get_dashboard_stats(self) -> dict[str, Any]:
        """Appointment totals by status plus entity counts.

        Every status is present in ``appointments_by_status``, zero when no
        appointment has it.
        """
        by_status = {status.value: 0 for status in AppointmentStatus}
        result = await self.session.execute(
            select(Appointment.status, func.count()).group_by(Appointment.status)
        )
        for status, count in result.all():
            by_status[AppointmentStatus(status).value] = count

        return {
            "total_appointments": sum(by_status.values()),
            "appointments_by_status": by_status,
            "total_locations": await self._count(Location),
            "total_departments": await self._count(Department),
            "total_doctors": await self._count(Doctor),
            "total_packages": await self._count(Package),
        }

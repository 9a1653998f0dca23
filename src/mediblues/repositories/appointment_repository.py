"""
Appointment Repository.

Booking rules by appointment type:

    NORMAL (1)   full_name, mobile_number, location, reason_for_visit and
                 message are required. The location must exist. Department
                 and doctor may be given by id (must exist) or by name
                 (unknown names are left empty).
    PACKAGE (2)  full_name, mobile_number and an existing package are
                 required. The reason is derived from the package name and
                 the message from ``notes``. Location is optional.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from ..core.exceptions import ReferentialError, ValidationError
from ..db.session import Base
from ..models.appointment import Appointment
from ..models.department import Department
from ..models.doctor import Doctor
from ..models.enums import AppointmentStatus, AppointmentType
from ..models.location import Location
from ..models.package import Package
from .base import CrudRepository, _is_blank

logger = logging.getLogger(__name__)

# name keys accepted alongside the *_id columns
_NAMED_LINKS: dict[str, tuple[str, type[Base]]] = {
    "location": ("location_id", Location),
    "department": ("department_id", Department),
    "doctor": ("doctor_id", Doctor),
}


class AppointmentRepository(CrudRepository[Appointment]):
    """Repository for Appointment entity operations."""

    model = Appointment
    resource_name = "Appointment"
    required_fields = ("full_name", "mobile_number")
    references = {
        "location_id": Location,
        "department_id": Department,
        "doctor_id": Doctor,
        "package_id": Package,
    }
    default_options = (
        selectinload(Appointment.location),
        selectinload(Appointment.department),
        selectinload(Appointment.doctor),
        selectinload(Appointment.package),
    )

    async def book(self, fields: Mapping[str, Any]) -> Appointment:
        """
        Create an appointment, inferring its type from ``package_id``.

        Raises:
            ValidationError: a field required for the inferred type is missing
            ReferentialError: the location (normal) or package (package) does not exist
        """
        data = dict(fields)
        names = {key: data.pop(key, None) for key in _NAMED_LINKS}
        notes = data.pop("notes", None)
        data.pop("type", None)
        data.pop("status", None)

        if data.get("package_id") is not None:
            values = await self._package_booking(data, names, notes)
        else:
            values = await self._normal_booking(data, names)

        values["status"] = AppointmentStatus.PENDING
        appointment = await self.create(values)
        logger.info(
            f"Booked appointment: id={appointment.id}, type={appointment.type}, "
            f"location_id={appointment.location_id}"
        )
        return appointment

    async def _normal_booking(
        self,
        data: dict[str, Any],
        names: Mapping[str, str | None],
    ) -> dict[str, Any]:
        missing = [name for name in ("full_name", "mobile_number") if _is_blank(data.get(name))]
        if data.get("location_id") is None and _is_blank(names["location"]):
            missing.append("location")
        missing += [name for name in ("reason_for_visit", "message") if _is_blank(data.get(name))]
        if missing:
            raise ValidationError(
                message=f"Missing required fields: {', '.join(missing)}",
                fields=missing,
            )

        if data.get("location_id") is None:
            data["location_id"] = await self.resolve_name(Location, names["location"])
            if data["location_id"] is None:
                raise ReferentialError(
                    resource_type="location",
                    resource_id=names["location"],
                    message="Invalid location",
                )
        for key in ("department", "doctor"):
            column, model = _NAMED_LINKS[key]
            if data.get(column) is None and not _is_blank(names[key]):
                data[column] = await self.resolve_name(model, names[key])

        data["type"] = AppointmentType.NORMAL.value
        return data

    async def _package_booking(
        self,
        data: dict[str, Any],
        names: Mapping[str, str | None],
        notes: str | None,
    ) -> dict[str, Any]:
        missing = [name for name in ("full_name", "mobile_number") if _is_blank(data.get(name))]
        if missing:
            raise ValidationError(
                message=f"Missing required fields: {', '.join(missing)}",
                fields=missing,
            )

        package = await self.session.get(Package, data["package_id"])
        if package is None:
            raise ReferentialError(
                resource_type="package",
                resource_id=data["package_id"],
                message="Package not found",
            )

        if data.get("location_id") is None and not _is_blank(names["location"]):
            data["location_id"] = await self.resolve_name(Location, names["location"])

        data.update(
            type=AppointmentType.PACKAGE.value,
            reason_for_visit=f"Health Check Package: {package.name}",
            message=notes or "",
            department_id=None,
            doctor_id=None,
        )
        return data

    async def resolve_name(self, model: type[Base], name: str | None) -> int | None:
        """Find a row id by case-insensitive exact name; None when absent."""
        if _is_blank(name):
            return None
        result = await self.session.execute(
            select(model.id)
            .where(func.lower(model.name) == name.strip().lower())
            .order_by(model.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_appointments(
        self,
        location_id: int | None = None,
        department_id: int | None = None,
        appointment_type: int | None = None,
        status: AppointmentStatus | str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = 10,
        offset: int = 0,
    ) -> tuple[Sequence[Appointment], int]:
        """Filtered appointments, latest preferred date first. Date bounds are inclusive."""
        conditions = []
        if location_id is not None:
            conditions.append(Appointment.location_id == location_id)
        if department_id is not None:
            conditions.append(Appointment.department_id == department_id)
        if appointment_type is not None:
            conditions.append(Appointment.type == int(appointment_type))
        if status is not None:
            conditions.append(Appointment.status == self._status(status))
        if start_date is not None:
            conditions.append(Appointment.preferred_date >= start_date)
        if end_date is not None:
            conditions.append(Appointment.preferred_date <= end_date)

        return await self.find_page(
            *conditions,
            options=self.default_options,
            order_by=(
                Appointment.preferred_date.desc().nulls_last(),
                Appointment.created_at.desc(),
                Appointment.id.desc(),
            ),
            limit=limit,
            offset=offset,
        )

    async def update_appointment(self, appointment_id: int, fields: Mapping[str, Any]) -> Appointment:
        """
        Partial update. Location, department and doctor may be re-linked by
        id or by name; an unknown name is a ReferentialError here.
        """
        data = dict(fields)
        for key, (column, model) in _NAMED_LINKS.items():
            if key not in data:
                continue
            name = data.pop(key)
            if _is_blank(name):
                data[column] = None
                continue
            resolved = await self.resolve_name(model, name)
            if resolved is None:
                raise ReferentialError(resource_type=key, resource_id=name, message=f"Invalid {key}")
            data[column] = resolved
        if "status" in data:
            data["status"] = self._status(data["status"])
        for locked in ("type", "package_id"):
            if locked in data:
                raise ValidationError(message=f"{locked} cannot be changed", fields=[locked])
        return await self.update(appointment_id, data)

    @staticmethod
    def _status(value: AppointmentStatus | str) -> AppointmentStatus:
        try:
            return AppointmentStatus(value)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in AppointmentStatus)
            raise ValidationError(
                message=f"Invalid status '{value}'. Allowed: {allowed}",
                fields=["status"],
            ) from exc

"""
Doctor Repository.

Data access for doctors, their specialization rows and their department
links. Specializations are replaced wholesale (delete then insert in list
order); department links go through ``replace_associations``.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy import delete, insert, or_
from sqlalchemy.orm import selectinload

from ..models.associations import doctor_departments
from ..models.department import Department
from ..models.doctor import Doctor, DoctorSpecialization
from ..models.location import Location
from .base import CrudRepository

logger = logging.getLogger(__name__)


class DoctorRepository(CrudRepository[Doctor]):
    """
    Repository for Doctor entity database operations.

    Reads always load the doctor's location, departments and
    specializations so responses can be built without lazy loads.
    """

    model = Doctor
    resource_name = "Doctor"
    required_fields = ("name", "location_id")
    references = {"location_id": Location}
    default_options = (
        selectinload(Doctor.location),
        selectinload(Doctor.departments),
        selectinload(Doctor.specializations),
    )

    async def list_doctors(
        self,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[Doctor], int]:
        """Doctors ordered by experience (most experienced first)."""
        return await self.find_page(
            options=self.default_options,
            order_by=(Doctor.experience.desc().nulls_last(), Doctor.id),
            limit=limit,
            offset=offset,
        )

    async def search(
        self,
        query: str | None = None,
        department_id: int | None = None,
        location_id: int | None = None,
    ) -> Sequence[Doctor]:
        """
        Search doctors by name or specialization.

        A doctor matches when the query is a case-insensitive substring of
        its name OR of any of its specializations. Department and location
        filters narrow the result. ``%`` and ``_`` in the query are literal.
        Each doctor appears once, newest id first.
        """
        conditions = []
        term = (query or "").strip()
        if term:
            conditions.append(
                or_(
                    Doctor.name.icontains(term, autoescape=True),
                    Doctor.specializations.any(
                        DoctorSpecialization.specialization.icontains(term, autoescape=True)
                    ),
                )
            )
        if department_id is not None:
            conditions.append(Doctor.departments.any(Department.id == department_id))
        if location_id is not None:
            conditions.append(Doctor.location_id == location_id)

        return await self.find_all(
            *conditions,
            options=self.default_options,
            order_by=(Doctor.id.desc(),),
        )

    async def create_doctor(
        self,
        fields: Mapping[str, Any],
        department_ids: Iterable[int] | None = None,
        specializations: Iterable[str] | None = None,
    ) -> Doctor:
        """
        Create a doctor with optional department links and specializations.

        Raises:
            ValidationError: name or location_id missing
            ReferentialError: location_id does not exist
        """
        doctor = await self.create(fields)
        if department_ids is not None:
            await self.set_departments(doctor.id, department_ids)
        if specializations is not None:
            await self.replace_specializations(doctor.id, specializations)
        return await self.get_or_raise(doctor.id)

    async def update_doctor(
        self,
        doctor_id: int,
        fields: Mapping[str, Any],
        department_ids: Iterable[int] | None = None,
        specializations: Iterable[str] | None = None,
    ) -> Doctor:
        """Partial update. Given association lists replace the stored ones."""
        doctor = await self.update(doctor_id, fields)
        if department_ids is None and specializations is None:
            return doctor
        if department_ids is not None:
            await self.set_departments(doctor_id, department_ids)
        if specializations is not None:
            await self.replace_specializations(doctor_id, specializations)
        return await self.get_or_raise(doctor_id)

    async def set_departments(self, doctor_id: int, department_ids: Iterable[int]) -> list[int]:
        return await self.replace_associations(
            doctor_departments, doctor_id, Department, department_ids
        )

    async def replace_specializations(self, doctor_id: int, specializations: Iterable[str]) -> list[str]:
        """Delete every specialization row of the doctor and insert the new list."""
        labels = [label.strip() for label in specializations if label and label.strip()]
        await self.session.execute(
            delete(DoctorSpecialization).where(DoctorSpecialization.doctor_id == doctor_id)
        )
        if labels:
            await self.session.execute(
                insert(DoctorSpecialization),
                [{"doctor_id": doctor_id, "specialization": label} for label in labels],
            )
        logger.info(f"Replaced specializations for doctor {doctor_id}: {len(labels)} row(s)")
        return labels

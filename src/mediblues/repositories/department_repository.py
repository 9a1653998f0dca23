"""
Department Repository.

Handles department CRUD, the department-location association set and
the rich page-content update. Public reads only see active departments.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy.orm import selectinload

from ..core.exceptions import ValidationError
from ..models.associations import department_locations
from ..models.department import Department
from ..models.location import Location
from .base import CrudRepository

logger = logging.getLogger(__name__)

CONTENT_FIELDS = (
    "overview",
    "achievements",
    "legacy",
    "treatments",
    "facilities",
    "expertise",
    "why_choose",
    "faqs",
)


class DepartmentRepository(CrudRepository[Department]):
    """Repository for Department entity operations."""

    model = Department
    resource_name = "Department"
    required_fields = ("name",)
    unique_fields = ("name",)
    default_options = (selectinload(Department.locations),)

    async def list_departments(self, include_inactive: bool = False) -> Sequence[Department]:
        where = () if include_inactive else (Department.is_active.is_(True),)
        return await self.find_all(
            *where,
            options=self.default_options,
            order_by=(Department.created_at.desc(), Department.id.desc()),
        )

    async def get_department(self, department_id: int, include_inactive: bool = False) -> Department:
        department = await self.get_or_raise(department_id)
        if not include_inactive and not department.is_active:
            raise self._not_found(department_id)
        return department

    async def create_department(
        self,
        fields: Mapping[str, Any],
        location_ids: Iterable[int] | None = None,
    ) -> Department:
        """Create a department and link it to the given (existing) locations."""
        department = await self.create(fields)
        if location_ids is not None:
            await self.set_locations(department.id, location_ids)
        return await self.get_or_raise(department.id)

    async def update_department(
        self,
        department_id: int,
        fields: Mapping[str, Any],
        location_ids: Iterable[int] | None = None,
    ) -> Department:
        """Partial update; ``location_ids`` (when given) replaces the whole set."""
        department = await self.update(department_id, fields)
        if location_ids is not None:
            await self.set_locations(department_id, location_ids)
            department = await self.get_or_raise(department_id)
        return department

    async def update_content(self, department_id: int, fields: Mapping[str, Any]) -> Department:
        """Update only the page-content fields of a department."""
        other = sorted(set(fields) - set(CONTENT_FIELDS))
        if other:
            raise ValidationError(
                message=f"Only content fields can be updated here: {', '.join(other)}",
                fields=other,
            )
        return await self.update(department_id, fields)

    async def set_locations(self, department_id: int, location_ids: Iterable[int]) -> list[int]:
        return await self.replace_associations(
            department_locations, department_id, Location, location_ids
        )

    async def soft_delete(self, department_id: int) -> Department:
        """Hide a department from public reads."""
        return await self.update(department_id, {"is_active": False})

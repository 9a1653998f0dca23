"""
Location Repository.

Public reads only see enabled locations; admin reads see all of them.
Deleting a location cascades to its doctors and department links.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import selectinload

from ..models.location import Location
from .base import CrudRepository

logger = logging.getLogger(__name__)


class LocationRepository(CrudRepository[Location]):
    """Repository for Location entity operations."""

    model = Location
    resource_name = "Location"
    required_fields = ("name", "address", "phone", "email")
    unique_fields = ("name",)
    default_options = (
        selectinload(Location.doctors),
        selectinload(Location.departments),
    )

    async def list_locations(self, include_disabled: bool = False) -> Sequence[Location]:
        """Locations with their doctors and departments, newest first."""
        where = () if include_disabled else (Location.enabled.is_(True),)
        return await self.find_all(
            *where,
            options=self.default_options,
            order_by=(Location.created_at.desc(), Location.id.desc()),
        )

    async def list_simple(self) -> Sequence[Location]:
        """Enabled locations without relations, ordered by name (for dropdowns)."""
        return await self.find_all(
            Location.enabled.is_(True),
            order_by=(Location.name,),
        )

    async def get_location(self, location_id: int, include_disabled: bool = False) -> Location:
        """Get a location; disabled ones are hidden unless ``include_disabled``."""
        location = await self.get_or_raise(location_id)
        if not include_disabled and not location.enabled:
            raise self._not_found(location_id)
        return location

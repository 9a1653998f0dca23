"""Small reference schemas embedded in other responses."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class EntityRef(BaseModel):
    """Id and name of a related row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class LocationRef(EntityRef):
    """Related location."""


class DepartmentRef(EntityRef):
    """Related department."""


class DoctorRef(EntityRef):
    """Related doctor."""


class PackageRef(EntityRef):
    """Related package."""

"""
Department Pydantic Schemas.

``treatments`` and ``facilities`` are lists of strings; ``why_choose`` and
``faqs`` hold arbitrary JSON items (e.g. ``{"question": ..., "answer": ...}``).
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .common import LocationRef


class DepartmentContent(BaseModel):
    """Rich page content of a department."""

    overview: str | None = None
    achievements: str | None = None
    legacy: str | None = None
    treatments: list[str] = Field(default_factory=list)
    facilities: list[str] = Field(default_factory=list)
    expertise: str | None = None
    why_choose: list[Any] = Field(default_factory=list)
    faqs: list[Any] = Field(default_factory=list)


class DepartmentCreate(DepartmentContent):
    """Schema for creating a department (admin)."""

    name: str = Field(..., min_length=1, max_length=255)
    heading: str | None = Field(default=None, max_length=255)
    description: str | None = None
    image: str | None = Field(default=None, max_length=500)
    is_active: bool = True
    location_ids: list[int] | None = Field(
        default=None,
        description="Locations offering this department; unknown ids are ignored",
    )


class DepartmentUpdate(BaseModel):
    """Partial update; ``location_ids`` replaces the whole set when given."""

    name: str | None = Field(default=None, max_length=255)
    heading: str | None = Field(default=None, max_length=255)
    description: str | None = None
    image: str | None = Field(default=None, max_length=500)
    overview: str | None = None
    achievements: str | None = None
    legacy: str | None = None
    treatments: list[str] | None = None
    facilities: list[str] | None = None
    expertise: str | None = None
    why_choose: list[Any] | None = None
    faqs: list[Any] | None = None
    is_active: bool | None = None
    location_ids: list[int] | None = None


class DepartmentContentUpdate(BaseModel):
    """Content-only partial update."""

    overview: str | None = None
    achievements: str | None = None
    legacy: str | None = None
    treatments: list[str] | None = None
    facilities: list[str] | None = None
    expertise: str | None = None
    why_choose: list[Any] | None = None
    faqs: list[Any] | None = None


class DepartmentResponse(DepartmentContent):
    """Department with the locations that offer it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    heading: str | None
    description: str | None
    image: str | None
    is_active: bool
    locations: list[LocationRef] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

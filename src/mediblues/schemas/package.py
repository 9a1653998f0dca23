"""
Package Pydantic Schemas.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PackageTestItem(BaseModel):
    """A diagnostic test within a package."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=100)
    normal_range: str | None = Field(default=None, max_length=100)
    unit: str | None = Field(default=None, max_length=50)


class PackageCreate(BaseModel):
    """Schema for creating a package (admin)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    discount_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    key_features: list[str] = Field(default_factory=list)
    duration: str | None = Field(default=None, max_length=100)
    report_delivery: str | None = Field(default=None, max_length=100)
    image: str | None = Field(default=None, max_length=500)
    age_range: str | None = Field(default="All ages", max_length=100)
    is_active: bool = True
    tests: list[PackageTestItem] | None = None


class PackageUpdate(BaseModel):
    """Partial update; ``tests`` replaces the whole list when given."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    discount_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    key_features: list[str] | None = None
    duration: str | None = Field(default=None, max_length=100)
    report_delivery: str | None = Field(default=None, max_length=100)
    image: str | None = Field(default=None, max_length=500)
    age_range: str | None = Field(default=None, max_length=100)
    is_active: bool | None = None
    tests: list[PackageTestItem] | None = None


class PackageTestResponse(PackageTestItem):
    id: int


class PackageResponse(BaseModel):
    """Package with its tests. Prices are plain numbers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    price: float
    discount_price: float | None
    key_features: list[str]
    duration: str | None
    report_delivery: str | None
    image: str | None
    age_range: str | None
    is_active: bool
    tests: list[PackageTestResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

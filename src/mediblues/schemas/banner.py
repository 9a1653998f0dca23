"""
Banner Pydantic Schemas.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BannerCreate(BaseModel):
    """Schema for creating a banner (admin)."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image: str = Field(..., min_length=1, max_length=500)
    link: str | None = Field(default=None, max_length=500)
    is_active: bool = True
    is_hero: bool = False


class BannerUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    image: str | None = Field(default=None, max_length=500)
    link: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None
    is_hero: bool | None = None


class BannerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    image: str
    link: str | None
    is_active: bool
    is_hero: bool
    created_at: datetime
    updated_at: datetime

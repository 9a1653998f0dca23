"""Banner Repository."""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..core.exceptions import ValidationError
from ..models.banner import Banner
from .base import CrudRepository

logger = logging.getLogger(__name__)


class BannerRepository(CrudRepository[Banner]):
    """Repository for Banner entity operations."""

    model = Banner
    resource_name = "Banner"
    required_fields = ("title", "image")

    async def list_banners(
        self,
        include_inactive: bool = False,
        hero: bool | None = None,
    ) -> Sequence[Banner]:
        conditions = []
        if not include_inactive:
            conditions.append(Banner.is_active.is_(True))
        if hero is not None:
            conditions.append(Banner.is_hero.is_(hero))
        return await self.find_all(
            *conditions,
            order_by=(Banner.created_at.desc(), Banner.id.desc()),
        )

    async def get_banner(self, banner_id: int, include_inactive: bool = False) -> Banner:
        banner = await self.get_or_raise(banner_id)
        if not include_inactive and not banner.is_active:
            raise self._not_found(banner_id)
        return banner

    async def update(self, key: int, fields: Mapping[str, Any]) -> Banner:
        if not fields:
            raise ValidationError(message="No fields to update")
        return await super().update(key, fields)

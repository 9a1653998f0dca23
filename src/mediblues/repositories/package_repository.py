"""
Package Repository.

Health-check packages and their normalized test rows. Test lists are
replaced wholesale (delete then insert in list order).
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy import delete, insert
from sqlalchemy.orm import selectinload

from ..core.exceptions import ValidationError
from ..models.package import Package, PackageTest
from .base import CrudRepository, _is_blank

logger = logging.getLogger(__name__)

_TEST_FIELDS = ("name", "category", "normal_range", "unit")


class PackageRepository(CrudRepository[Package]):
    """Repository for Package entity operations."""

    model = Package
    resource_name = "Package"
    required_fields = ("name", "price")
    unique_fields = ("name",)
    default_options = (selectinload(Package.tests),)

    async def list_packages(
        self,
        include_inactive: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[Sequence[Package], int]:
        """Packages, newest id first. Public callers only see active ones."""
        where = () if include_inactive else (Package.is_active.is_(True),)
        return await self.find_page(
            *where,
            options=self.default_options,
            order_by=(Package.id.desc(),),
            limit=limit,
            offset=offset,
        )

    async def get_package(self, package_id: int, include_inactive: bool = False) -> Package:
        package = await self.get_or_raise(package_id)
        if not include_inactive and not package.is_active:
            raise self._not_found(package_id)
        return package

    async def create_package(
        self,
        fields: Mapping[str, Any],
        tests: Iterable[Mapping[str, Any]] | None = None,
    ) -> Package:
        package = await self.create(fields)
        if tests is not None:
            await self.replace_tests(package.id, tests)
            package = await self.get_or_raise(package.id)
        return package

    async def update_package(
        self,
        package_id: int,
        fields: Mapping[str, Any],
        tests: Iterable[Mapping[str, Any]] | None = None,
    ) -> Package:
        package = await self.update(package_id, fields)
        if tests is not None:
            await self.replace_tests(package_id, tests)
            package = await self.get_or_raise(package_id)
        return package

    async def replace_tests(self, package_id: int, tests: Iterable[Mapping[str, Any]]) -> int:
        """Delete every test of the package and insert ``tests`` in order."""
        rows = []
        for position, test in enumerate(tests):
            if _is_blank(test.get("name")):
                raise ValidationError(
                    message=f"tests[{position}].name is required",
                    fields=[f"tests[{position}].name"],
                )
            row = {key: test.get(key) for key in _TEST_FIELDS}
            row["package_id"] = package_id
            rows.append(row)

        await self.session.execute(delete(PackageTest).where(PackageTest.package_id == package_id))
        if rows:
            await self.session.execute(insert(PackageTest), rows)
        logger.info(f"Replaced tests for package {package_id}: {len(rows)} row(s)")
        return len(rows)

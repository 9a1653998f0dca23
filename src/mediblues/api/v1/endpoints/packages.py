"""
Health-check Package API Endpoints.

Public lists are paginated by ``page``/``limit`` and only show active
packages; admins see every package.
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse, PaginatedResponse, PaginationMeta
from ....db.session import DbSession
from ....repositories.package_repository import PackageRepository
from ....schemas.package import PackageCreate, PackageResponse, PackageUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/packages", tags=["Packages"])
admin_router = APIRouter(prefix="/admin/packages", tags=["Admin - Packages"])


async def get_package_repo(db: DbSession) -> PackageRepository:
    """Get package repository."""
    return PackageRepository(db)


def _test_rows(payload: PackageCreate | PackageUpdate) -> list[dict] | None:
    if payload.tests is None:
        return None
    return [test.model_dump() for test in payload.tests]


async def _paginated(
    repo: PackageRepository,
    include_inactive: bool,
    page: int,
    limit: int,
) -> PaginatedResponse[PackageResponse]:
    offset = (page - 1) * limit
    packages, total = await repo.list_packages(
        include_inactive=include_inactive,
        limit=limit,
        offset=offset,
    )
    return PaginatedResponse(
        message=f"Found {total} packages",
        data=[PackageResponse.model_validate(p) for p in packages],
        pagination=PaginationMeta.from_total(total, limit, offset),
    )


@router.get(
    "",
    response_model=PaginatedResponse[PackageResponse],
    summary="List active packages",
)
async def list_packages(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
    repo: PackageRepository = Depends(get_package_repo),
) -> PaginatedResponse[PackageResponse]:
    return await _paginated(repo, include_inactive=False, page=page, limit=limit)


@router.get(
    "/{package_id}",
    response_model=GenericResponse[PackageResponse],
    summary="Get active package by ID",
)
async def get_package(
    package_id: Annotated[int, Path(description="Package ID")],
    repo: PackageRepository = Depends(get_package_repo),
) -> GenericResponse[PackageResponse]:
    package = await repo.get_package(package_id)
    return GenericResponse(
        message="Package retrieved successfully",
        data=PackageResponse.model_validate(package),
    )


@admin_router.get(
    "",
    response_model=PaginatedResponse[PackageResponse],
    summary="List all packages (including inactive)",
)
async def admin_list_packages(
    admin: AdminUser,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
    repo: PackageRepository = Depends(get_package_repo),
) -> PaginatedResponse[PackageResponse]:
    return await _paginated(repo, include_inactive=True, page=page, limit=limit)


@router.post(
    "",
    response_model=GenericResponse[PackageResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create package",
)
async def create_package(
    payload: PackageCreate,
    admin: AdminUser,
    repo: PackageRepository = Depends(get_package_repo),
) -> GenericResponse[PackageResponse]:
    package = await repo.create_package(payload.model_dump(exclude={"tests"}), tests=_test_rows(payload))
    logger.info(f"Package {package.id} created by {admin.email}")
    return GenericResponse(
        message="Package created successfully",
        data=PackageResponse.model_validate(package),
    )


@router.patch(
    "/{package_id}",
    response_model=GenericResponse[PackageResponse],
    summary="Update package",
)
async def update_package(
    package_id: Annotated[int, Path(description="Package ID")],
    payload: PackageUpdate,
    admin: AdminUser,
    repo: PackageRepository = Depends(get_package_repo),
) -> GenericResponse[PackageResponse]:
    tests = _test_rows(payload)
    if tests is None and "tests" in payload.model_fields_set:
        tests = []
    package = await repo.update_package(
        package_id,
        payload.model_dump(exclude_unset=True, exclude={"tests"}),
        tests=tests,
    )
    return GenericResponse(
        message="Package updated successfully",
        data=PackageResponse.model_validate(package),
    )


@router.delete(
    "/{package_id}",
    response_model=GenericResponse[None],
    summary="Delete package",
    description="Deletes the package, its tests and its bookings.",
)
async def delete_package(
    package_id: Annotated[int, Path(description="Package ID")],
    admin: AdminUser,
    repo: PackageRepository = Depends(get_package_repo),
) -> GenericResponse[None]:
    await repo.delete(package_id)
    logger.info(f"Package {package_id} deleted by {admin.email}")
    return GenericResponse(message="Package deleted successfully", data=None)

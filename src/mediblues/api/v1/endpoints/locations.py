"""
Location API Endpoints.

Public:
- List enabled locations (with doctors and departments)
- Simple enabled-location list for dropdowns
- Get a location by ID

Admin:
- List all locations, create, update, delete (cascades to doctors)
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse
from ....db.session import DbSession
from ....repositories.location_repository import LocationRepository
from ....schemas.location import (
    LocationCreate,
    LocationResponse,
    LocationSimpleResponse,
    LocationUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["Locations"])
admin_router = APIRouter(prefix="/admin/locations", tags=["Admin - Locations"])


async def get_location_repo(db: DbSession) -> LocationRepository:
    """Get location repository."""
    return LocationRepository(db)


# =============================================================================
# Public
# =============================================================================

@router.get(
    "",
    response_model=GenericResponse[list[LocationResponse]],
    summary="List enabled locations",
)
async def list_locations(
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[list[LocationResponse]]:
    locations = await repo.list_locations()
    return GenericResponse(
        message=f"Found {len(locations)} locations",
        data=[LocationResponse.model_validate(loc) for loc in locations],
    )


@router.get(
    "/simple",
    response_model=GenericResponse[list[LocationSimpleResponse]],
    summary="List enabled locations without relations",
)
async def list_locations_simple(
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[list[LocationSimpleResponse]]:
    locations = await repo.list_simple()
    return GenericResponse(
        message=f"Found {len(locations)} locations",
        data=[LocationSimpleResponse.model_validate(loc) for loc in locations],
    )


@router.get(
    "/{location_id}",
    response_model=GenericResponse[LocationResponse],
    summary="Get location by ID",
)
async def get_location(
    location_id: Annotated[int, Path(description="Location ID")],
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[LocationResponse]:
    location = await repo.get_location(location_id)
    return GenericResponse(
        message="Location retrieved successfully",
        data=LocationResponse.model_validate(location),
    )


# =============================================================================
# Admin
# =============================================================================

@admin_router.get(
    "",
    response_model=GenericResponse[list[LocationResponse]],
    summary="List all locations (including disabled)",
)
async def admin_list_locations(
    admin: AdminUser,
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[list[LocationResponse]]:
    locations = await repo.list_locations(include_disabled=True)
    return GenericResponse(
        message=f"Found {len(locations)} locations",
        data=[LocationResponse.model_validate(loc) for loc in locations],
    )


@router.post(
    "",
    response_model=GenericResponse[LocationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create location",
)
async def create_location(
    payload: LocationCreate,
    admin: AdminUser,
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[LocationResponse]:
    location = await repo.create(payload.model_dump())
    logger.info(f"Location {location.id} created by {admin.email}")
    return GenericResponse(
        message="Location created successfully",
        data=LocationResponse.model_validate(location),
    )


@router.patch(
    "/{location_id}",
    response_model=GenericResponse[LocationResponse],
    summary="Update location",
)
async def update_location(
    location_id: Annotated[int, Path(description="Location ID")],
    payload: LocationUpdate,
    admin: AdminUser,
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[LocationResponse]:
    location = await repo.update(location_id, payload.model_dump(exclude_unset=True))
    return GenericResponse(
        message="Location updated successfully",
        data=LocationResponse.model_validate(location),
    )


@router.delete(
    "/{location_id}",
    response_model=GenericResponse[None],
    summary="Delete location",
    description="Deletes the location together with its doctors and department links.",
)
async def delete_location(
    location_id: Annotated[int, Path(description="Location ID")],
    admin: AdminUser,
    repo: LocationRepository = Depends(get_location_repo),
) -> GenericResponse[None]:
    await repo.delete(location_id)
    logger.info(f"Location {location_id} deleted by {admin.email}")
    return GenericResponse(message="Location deleted successfully", data=None)

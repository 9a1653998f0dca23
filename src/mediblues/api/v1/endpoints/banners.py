"""
Banner API Endpoints.
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse
from ....db.session import DbSession
from ....repositories.banner_repository import BannerRepository
from ....schemas.banner import BannerCreate, BannerResponse, BannerUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/banners", tags=["Banners"])
admin_router = APIRouter(prefix="/admin/banners", tags=["Admin - Banners"])


async def get_banner_repo(db: DbSession) -> BannerRepository:
    """Get banner repository."""
    return BannerRepository(db)


@router.get(
    "",
    response_model=GenericResponse[list[BannerResponse]],
    summary="List active banners",
)
async def list_banners(
    hero: Annotated[bool | None, Query(description="Only hero (true) or only carousel (false) banners")] = None,
    repo: BannerRepository = Depends(get_banner_repo),
) -> GenericResponse[list[BannerResponse]]:
    banners = await repo.list_banners(hero=hero)
    return GenericResponse(
        message=f"Found {len(banners)} banners",
        data=[BannerResponse.model_validate(b) for b in banners],
    )


@router.get(
    "/{banner_id}",
    response_model=GenericResponse[BannerResponse],
    summary="Get active banner by ID",
)
async def get_banner(
    banner_id: Annotated[int, Path(description="Banner ID")],
    repo: BannerRepository = Depends(get_banner_repo),
) -> GenericResponse[BannerResponse]:
    banner = await repo.get_banner(banner_id)
    return GenericResponse(
        message="Banner retrieved successfully",
        data=BannerResponse.model_validate(banner),
    )


@admin_router.get(
    "",
    response_model=GenericResponse[list[BannerResponse]],
    summary="List all banners",
)
async def admin_list_banners(
    admin: AdminUser,
    repo: BannerRepository = Depends(get_banner_repo),
) -> GenericResponse[list[BannerResponse]]:
    banners = await repo.list_banners(include_inactive=True)
    return GenericResponse(
        message=f"Found {len(banners)} banners",
        data=[BannerResponse.model_validate(b) for b in banners],
    )


@router.post(
    "",
    response_model=GenericResponse[BannerResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create banner",
)
async def create_banner(
    payload: BannerCreate,
    admin: AdminUser,
    repo: BannerRepository = Depends(get_banner_repo),
) -> GenericResponse[BannerResponse]:
    banner = await repo.create(payload.model_dump())
    return GenericResponse(
        message="Banner created successfully",
        data=BannerResponse.model_validate(banner),
    )


@router.patch(
    "/{banner_id}",
    response_model=GenericResponse[BannerResponse],
    summary="Update banner",
)
async def update_banner(
    banner_id: Annotated[int, Path(description="Banner ID")],
    payload: BannerUpdate,
    admin: AdminUser,
    repo: BannerRepository = Depends(get_banner_repo),
) -> GenericResponse[BannerResponse]:
    banner = await repo.update(banner_id, payload.model_dump(exclude_unset=True))
    return GenericResponse(
        message="Banner updated successfully",
        data=BannerResponse.model_validate(banner),
    )


@router.delete(
    "/{banner_id}",
    response_model=GenericResponse[None],
    summary="Delete banner",
)
async def delete_banner(
    banner_id: Annotated[int, Path(description="Banner ID")],
    admin: AdminUser,
    repo: BannerRepository = Depends(get_banner_repo),
) -> GenericResponse[None]:
    await repo.delete(banner_id)
    logger.info(f"Banner {banner_id} deleted by {admin.email}")
    return GenericResponse(message="Banner deleted successfully", data=None)

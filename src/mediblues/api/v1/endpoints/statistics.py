"""
Admin dashboard statistics endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse
from ....db.session import DbSession
from ....repositories.statistics_repository import StatisticsRepository
from ....schemas.statistics import DashboardStats

router = APIRouter(prefix="/admin/statistics", tags=["Admin - Statistics"])


@router.get(
    "",
    response_model=GenericResponse[DashboardStats],
    summary="Dashboard counts",
)
async def get_statistics(admin: AdminUser, db: DbSession) -> GenericResponse[DashboardStats]:
    stats = await StatisticsRepository(db).get_dashboard_stats()
    return GenericResponse(
        message="Statistics retrieved successfully",
        data=DashboardStats(**stats),
    )

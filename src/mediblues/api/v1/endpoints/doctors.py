"""
Doctor API Endpoints.

Public:
- Paginated doctor list (most experienced first)
- Search by name/specialization with department and location filters
- Get doctor by ID

Admin:
- Create, update (association lists replace stored ones), delete
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse, PaginatedResponse, PaginationMeta
from ....db.session import DbSession
from ....repositories.doctor_repository import DoctorRepository
from ....schemas.doctor import DoctorCreate, DoctorResponse, DoctorUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctors", tags=["Doctors"])

_ASSOCIATION_FIELDS = {"department_ids", "specializations"}


async def get_doctor_repo(db: DbSession) -> DoctorRepository:
    """Get doctor repository."""
    return DoctorRepository(db)


@router.get(
    "",
    response_model=PaginatedResponse[DoctorResponse],
    summary="List doctors",
)
async def list_doctors(
    limit: Annotated[int | None, Query(ge=1, le=100, description="Page size; omit for all")] = None,
    offset: Annotated[int, Query(ge=0, description="Skip N records")] = 0,
    repo: DoctorRepository = Depends(get_doctor_repo),
) -> PaginatedResponse[DoctorResponse]:
    doctors, total = await repo.list_doctors(limit=limit, offset=offset)
    return PaginatedResponse(
        message=f"Found {total} doctors",
        data=[DoctorResponse.model_validate(d) for d in doctors],
        pagination=PaginationMeta.from_total(total, limit, offset),
    )


@router.get(
    "/search",
    response_model=GenericResponse[list[DoctorResponse]],
    summary="Search doctors",
    description="Matches the query against doctor names and specializations (case-insensitive).",
)
async def search_doctors(
    q: Annotated[str | None, Query(max_length=255, description="Name or specialization fragment")] = None,
    department_id: Annotated[int | None, Query(description="Only doctors in this department")] = None,
    location_id: Annotated[int | None, Query(description="Only doctors at this location")] = None,
    repo: DoctorRepository = Depends(get_doctor_repo),
) -> GenericResponse[list[DoctorResponse]]:
    doctors = await repo.search(query=q, department_id=department_id, location_id=location_id)
    return GenericResponse(
        message=f"Found {len(doctors)} doctors",
        data=[DoctorResponse.model_validate(d) for d in doctors],
    )


@router.get(
    "/{doctor_id}",
    response_model=GenericResponse[DoctorResponse],
    summary="Get doctor by ID",
)
async def get_doctor(
    doctor_id: Annotated[int, Path(description="Doctor ID")],
    repo: DoctorRepository = Depends(get_doctor_repo),
) -> GenericResponse[DoctorResponse]:
    doctor = await repo.get_or_raise(doctor_id)
    return GenericResponse(
        message="Doctor retrieved successfully",
        data=DoctorResponse.model_validate(doctor),
    )


@router.post(
    "",
    response_model=GenericResponse[DoctorResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create doctor",
)
async def create_doctor(
    payload: DoctorCreate,
    admin: AdminUser,
    repo: DoctorRepository = Depends(get_doctor_repo),
) -> GenericResponse[DoctorResponse]:
    doctor = await repo.create_doctor(
        payload.model_dump(exclude=_ASSOCIATION_FIELDS),
        department_ids=payload.department_ids,
        specializations=payload.specializations,
    )
    logger.info(f"Doctor {doctor.id} created by {admin.email}")
    return GenericResponse(
        message="Doctor created successfully",
        data=DoctorResponse.model_validate(doctor),
    )


@router.patch(
    "/{doctor_id}",
    response_model=GenericResponse[DoctorResponse],
    summary="Update doctor",
)
async def update_doctor(
    doctor_id: Annotated[int, Path(description="Doctor ID")],
    payload: DoctorUpdate,
    admin: AdminUser,
    repo: DoctorRepository = Depends(get_doctor_repo),
) -> GenericResponse[DoctorResponse]:
    provided = payload.model_fields_set
    doctor = await repo.update_doctor(
        doctor_id,
        payload.model_dump(exclude_unset=True, exclude=_ASSOCIATION_FIELDS),
        department_ids=(payload.department_ids or []) if "department_ids" in provided else None,
        specializations=(payload.specializations or []) if "specializations" in provided else None,
    )
    return GenericResponse(
        message="Doctor updated successfully",
        data=DoctorResponse.model_validate(doctor),
    )


@router.delete(
    "/{doctor_id}",
    response_model=GenericResponse[None],
    summary="Delete doctor",
)
async def delete_doctor(
    doctor_id: Annotated[int, Path(description="Doctor ID")],
    admin: AdminUser,
    repo: DoctorRepository = Depends(get_doctor_repo),
) -> GenericResponse[None]:
    await repo.delete(doctor_id)
    logger.info(f"Doctor {doctor_id} deleted by {admin.email}")
    return GenericResponse(message="Doctor deleted successfully", data=None)

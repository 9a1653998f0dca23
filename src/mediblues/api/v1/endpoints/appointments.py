"""
Appointment API Endpoints.

Booking is public. Listing, reading, updating and deleting appointments
require an admin token.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse, PaginatedResponse, PaginationMeta
from ....db.session import DbSession
from ....models.enums import AppointmentStatus
from ....repositories.appointment_repository import AppointmentRepository
from ....schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


async def get_appointment_repo(db: DbSession) -> AppointmentRepository:
    """Get appointment repository."""
    return AppointmentRepository(db)


@router.post(
    "",
    response_model=GenericResponse[AppointmentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    description=(
        "Books a consultation, or a health-check package when package_id is given. "
        "Location, department and doctor may be passed by id or by name."
    ),
)
async def book_appointment(
    payload: AppointmentCreate,
    repo: AppointmentRepository = Depends(get_appointment_repo),
) -> GenericResponse[AppointmentResponse]:
    appointment = await repo.book(payload.model_dump())
    return GenericResponse(
        message="Appointment booked successfully",
        data=AppointmentResponse.model_validate(appointment),
    )


@router.get(
    "",
    response_model=PaginatedResponse[AppointmentResponse],
    summary="List appointments",
)
async def list_appointments(
    admin: AdminUser,
    location_id: Annotated[int | None, Query(description="Filter by location")] = None,
    department_id: Annotated[int | None, Query(description="Filter by department")] = None,
    appointment_type: Annotated[int | None, Query(alias="type", ge=1, le=2, description="1 = normal, 2 = package")] = None,
    appointment_status: Annotated[AppointmentStatus | None, Query(alias="status", description="Filter by status")] = None,
    start_date: Annotated[date | None, Query(description="Earliest preferred date (inclusive)")] = None,
    end_date: Annotated[date | None, Query(description="Latest preferred date (inclusive)")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 10,
    offset: Annotated[int, Query(ge=0, description="Skip N records")] = 0,
    repo: AppointmentRepository = Depends(get_appointment_repo),
) -> PaginatedResponse[AppointmentResponse]:
    appointments, total = await repo.list_appointments(
        location_id=location_id,
        department_id=department_id,
        appointment_type=appointment_type,
        status=appointment_status,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    return PaginatedResponse(
        message=f"Found {total} appointments",
        data=[AppointmentResponse.model_validate(a) for a in appointments],
        pagination=PaginationMeta.from_total(total, limit, offset),
    )


@router.get(
    "/{appointment_id}",
    response_model=GenericResponse[AppointmentResponse],
    summary="Get appointment by ID",
)
async def get_appointment(
    appointment_id: Annotated[int, Path(description="Appointment ID")],
    admin: AdminUser,
    repo: AppointmentRepository = Depends(get_appointment_repo),
) -> GenericResponse[AppointmentResponse]:
    appointment = await repo.get_or_raise(appointment_id)
    return GenericResponse(
        message="Appointment retrieved successfully",
        data=AppointmentResponse.model_validate(appointment),
    )


@router.patch(
    "/{appointment_id}",
    response_model=GenericResponse[AppointmentResponse],
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: Annotated[int, Path(description="Appointment ID")],
    payload: AppointmentUpdate,
    admin: AdminUser,
    repo: AppointmentRepository = Depends(get_appointment_repo),
) -> GenericResponse[AppointmentResponse]:
    appointment = await repo.update_appointment(appointment_id, payload.model_dump(exclude_unset=True))
    logger.info(f"Appointment {appointment_id} updated by {admin.email}")
    return GenericResponse(
        message="Appointment updated successfully",
        data=AppointmentResponse.model_validate(appointment),
    )


@router.delete(
    "/{appointment_id}",
    response_model=GenericResponse[None],
    summary="Delete appointment",
)
async def delete_appointment(
    appointment_id: Annotated[int, Path(description="Appointment ID")],
    admin: AdminUser,
    repo: AppointmentRepository = Depends(get_appointment_repo),
) -> GenericResponse[None]:
    await repo.delete(appointment_id)
    logger.info(f"Appointment {appointment_id} deleted by {admin.email}")
    return GenericResponse(message="Appointment deleted successfully", data=None)

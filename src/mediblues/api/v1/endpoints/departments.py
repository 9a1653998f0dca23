"""
Department API Endpoints.

Public reads only return active departments. Deleting is a soft delete
(``is_active = false``) unless ``permanent=true`` is passed.
"""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse
from ....db.session import DbSession
from ....repositories.department_repository import DepartmentRepository
from ....schemas.department import (
    DepartmentContentUpdate,
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/departments", tags=["Departments"])
admin_router = APIRouter(prefix="/admin/departments", tags=["Admin - Departments"])


async def get_department_repo(db: DbSession) -> DepartmentRepository:
    """Get department repository."""
    return DepartmentRepository(db)


@router.get(
    "",
    response_model=GenericResponse[list[DepartmentResponse]],
    summary="List active departments",
)
async def list_departments(
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[list[DepartmentResponse]]:
    departments = await repo.list_departments()
    return GenericResponse(
        message=f"Found {len(departments)} departments",
        data=[DepartmentResponse.model_validate(d) for d in departments],
    )


@router.get(
    "/{department_id}",
    response_model=GenericResponse[DepartmentResponse],
    summary="Get active department by ID",
)
async def get_department(
    department_id: Annotated[int, Path(description="Department ID")],
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[DepartmentResponse]:
    department = await repo.get_department(department_id)
    return GenericResponse(
        message="Department retrieved successfully",
        data=DepartmentResponse.model_validate(department),
    )


@admin_router.get(
    "",
    response_model=GenericResponse[list[DepartmentResponse]],
    summary="List all departments (including inactive)",
)
async def admin_list_departments(
    admin: AdminUser,
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[list[DepartmentResponse]]:
    departments = await repo.list_departments(include_inactive=True)
    return GenericResponse(
        message=f"Found {len(departments)} departments",
        data=[DepartmentResponse.model_validate(d) for d in departments],
    )


@router.post(
    "",
    response_model=GenericResponse[DepartmentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
)
async def create_department(
    payload: DepartmentCreate,
    admin: AdminUser,
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[DepartmentResponse]:
    department = await repo.create_department(
        payload.model_dump(exclude={"location_ids"}),
        location_ids=payload.location_ids,
    )
    logger.info(f"Department {department.id} created by {admin.email}")
    return GenericResponse(
        message="Department created successfully",
        data=DepartmentResponse.model_validate(department),
    )


@router.patch(
    "/{department_id}",
    response_model=GenericResponse[DepartmentResponse],
    summary="Update department",
)
async def update_department(
    department_id: Annotated[int, Path(description="Department ID")],
    payload: DepartmentUpdate,
    admin: AdminUser,
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[DepartmentResponse]:
    fields = payload.model_dump(exclude_unset=True, exclude={"location_ids"})
    department = await repo.update_department(
        department_id,
        fields,
        location_ids=(payload.location_ids or []) if "location_ids" in payload.model_fields_set else None,
    )
    return GenericResponse(
        message="Department updated successfully",
        data=DepartmentResponse.model_validate(department),
    )


@router.patch(
    "/{department_id}/content",
    response_model=GenericResponse[DepartmentResponse],
    summary="Update department page content",
)
async def update_department_content(
    department_id: Annotated[int, Path(description="Department ID")],
    payload: DepartmentContentUpdate,
    admin: AdminUser,
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[DepartmentResponse]:
    department = await repo.update_content(department_id, payload.model_dump(exclude_unset=True))
    return GenericResponse(
        message="Department content updated successfully",
        data=DepartmentResponse.model_validate(department),
    )


@router.delete(
    "/{department_id}",
    response_model=GenericResponse[None],
    summary="Delete department",
    description="Soft delete by default; pass permanent=true to remove the row.",
)
async def delete_department(
    department_id: Annotated[int, Path(description="Department ID")],
    admin: AdminUser,
    permanent: Annotated[bool, Query(description="Remove the row instead of deactivating it")] = False,
    repo: DepartmentRepository = Depends(get_department_repo),
) -> GenericResponse[None]:
    if permanent:
        await repo.delete(department_id)
        message = "Department permanently deleted"
    else:
        await repo.soft_delete(department_id)
        message = "Department deactivated"
    logger.info(f"Department {department_id}: {message.lower()} by {admin.email}")
    return GenericResponse(message=message, data=None)

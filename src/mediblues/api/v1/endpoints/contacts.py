"""
Contact API Endpoints.

- Published contact info (helpline numbers, emails): public read, admin CRUD
- Contact form: public submission, logged and acknowledged, not stored
"""
from __future__ import annotations

import logging
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Path, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse
from ....db.session import DbSession
from ....repositories.contact_repository import ContactInfoRepository
from ....schemas.contact import (
    ContactFormRequest,
    ContactFormResponse,
    ContactInfoCreate,
    ContactInfoResponse,
    ContactInfoUpdate,
)

logger = logging.getLogger(__name__)
audit_log = structlog.get_logger(__name__)

router = APIRouter(tags=["Contact"])


async def get_contact_repo(db: DbSession) -> ContactInfoRepository:
    """Get contact info repository."""
    return ContactInfoRepository(db)


@router.get(
    "/contact-info",
    response_model=GenericResponse[list[ContactInfoResponse]],
    summary="List active contact info",
)
async def list_contact_info(
    repo: ContactInfoRepository = Depends(get_contact_repo),
) -> GenericResponse[list[ContactInfoResponse]]:
    entries = await repo.list_active()
    return GenericResponse(
        message=f"Found {len(entries)} contact entries",
        data=[ContactInfoResponse.model_validate(e) for e in entries],
    )


@router.get(
    "/admin/contact-info",
    response_model=GenericResponse[list[ContactInfoResponse]],
    summary="List all contact info",
)
async def admin_list_contact_info(
    admin: AdminUser,
    repo: ContactInfoRepository = Depends(get_contact_repo),
) -> GenericResponse[list[ContactInfoResponse]]:
    entries = await repo.list_all()
    return GenericResponse(
        message=f"Found {len(entries)} contact entries",
        data=[ContactInfoResponse.model_validate(e) for e in entries],
    )


@router.post(
    "/contact-info",
    response_model=GenericResponse[ContactInfoResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create contact info",
)
async def create_contact_info(
    payload: ContactInfoCreate,
    admin: AdminUser,
    repo: ContactInfoRepository = Depends(get_contact_repo),
) -> GenericResponse[ContactInfoResponse]:
    entry = await repo.create(payload.model_dump())
    return GenericResponse(
        message="Contact info created successfully",
        data=ContactInfoResponse.model_validate(entry),
    )


@router.patch(
    "/contact-info/{contact_id}",
    response_model=GenericResponse[ContactInfoResponse],
    summary="Update contact info",
)
async def update_contact_info(
    contact_id: Annotated[int, Path(description="Contact info ID")],
    payload: ContactInfoUpdate,
    admin: AdminUser,
    repo: ContactInfoRepository = Depends(get_contact_repo),
) -> GenericResponse[ContactInfoResponse]:
    entry = await repo.update(contact_id, payload.model_dump(exclude_unset=True))
    return GenericResponse(
        message="Contact info updated successfully",
        data=ContactInfoResponse.model_validate(entry),
    )


@router.delete(
    "/contact-info/{contact_id}",
    response_model=GenericResponse[None],
    summary="Delete contact info",
)
async def delete_contact_info(
    contact_id: Annotated[int, Path(description="Contact info ID")],
    admin: AdminUser,
    repo: ContactInfoRepository = Depends(get_contact_repo),
) -> GenericResponse[None]:
    await repo.delete(contact_id)
    logger.info(f"Contact info {contact_id} deleted by {admin.email}")
    return GenericResponse(message="Contact info deleted successfully", data=None)


@router.post(
    "/contact",
    response_model=GenericResponse[ContactFormResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Submit the contact form",
)
async def submit_contact_form(
    payload: ContactFormRequest,
) -> GenericResponse[ContactFormResponse]:
    audit_log.info(
        "Contact form submitted",
        name=payload.name,
        email=payload.email,
        message_length=len(payload.message),
    )
    return GenericResponse(
        message="Thank you for contacting us. We will get back to you soon.",
        data=ContactFormResponse(name=payload.name, email=payload.email),
    )

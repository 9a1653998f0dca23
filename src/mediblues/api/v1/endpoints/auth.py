"""
Admin Authentication Endpoints.

- POST /auth/admin/login: exchange the admin email/password for a JWT
- GET  /auth/admin/me:    return the verified claims of the caller's token
"""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ....core.rbac import AdminUser
from ....core.responses import GenericResponse
from ....schemas.auth import AdminClaimsResponse, AdminLoginRequest, AdminLoginResponse, AdminProfile
from ....services.admin_auth_service import AdminAuthService, get_admin_auth_service

router = APIRouter(prefix="/auth/admin", tags=["Authentication"])


@router.post(
    "/login",
    response_model=GenericResponse[AdminLoginResponse],
    status_code=status.HTTP_200_OK,
    summary="Admin login",
    description="Returns a signed access token for the configured admin credentials.",
)
async def admin_login(
    payload: AdminLoginRequest,
    service: Annotated[AdminAuthService, Depends(get_admin_auth_service)],
) -> GenericResponse[AdminLoginResponse]:
    issued = service.issue_token(payload.email, payload.password)
    return GenericResponse(
        message="Login successful",
        data=AdminLoginResponse(
            access_token=issued.access_token,
            token_type=issued.token_type,
            expires_in=issued.expires_in,
            admin=AdminProfile(email=issued.email, name=issued.name, role=issued.role),
        ),
    )


@router.get(
    "/me",
    response_model=GenericResponse[AdminClaimsResponse],
    summary="Current admin",
)
async def current_admin(admin: AdminUser) -> GenericResponse[AdminClaimsResponse]:
    return GenericResponse(
        message="Token is valid",
        data=AdminClaimsResponse(
            email=admin.email,
            role=admin.role,
            issued_at=admin.issued_at,
            expires_at=admin.expires_at,
        ),
    )

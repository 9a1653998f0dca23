"""
Admin authentication schemas.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Admin email (case-insensitive)")
    password: str = Field(..., min_length=1, description="Admin password")


class AdminProfile(BaseModel):
    email: str
    name: str
    role: str


class AdminLoginResponse(BaseModel):
    """Signed token plus the admin profile."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    admin: AdminProfile


class AdminClaimsResponse(BaseModel):
    """Verified claims of the caller's token."""

    email: str
    role: str
    issued_at: datetime
    expires_at: datetime

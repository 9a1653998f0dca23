"""Admin access-control FastAPI dependency.

Usage:
    @router.post("/locations")
    async def create_location(payload: LocationCreate, admin: AdminUser):
        ...

The endpoint body only runs once the token has been verified; ``admin``
holds the verified claims.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Annotated, Any

import structlog
from fastapi import Depends, Request

from .config import Settings, get_settings
from .exceptions import InvalidTokenError, MissingTokenError
from .security import verify_token

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AdminClaims:
    """Verified claims of an admin token."""

    email: str
    role: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AdminClaims:
        email = payload.get("email") or payload.get("sub")
        role = payload.get("role")
        iat = payload.get("iat")
        if not isinstance(email, str) or not email or role != "admin" or not isinstance(iat, int):
            raise InvalidTokenError("malformed")
        return cls(
            email=email,
            role=role,
            issued_at=datetime.fromtimestamp(iat, UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


async def require_admin(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> AdminClaims:
    """Require a valid admin bearer token.

    Raises:
        MissingTokenError: no Authorization header (or an empty one)
        InvalidTokenError: malformed, tampered or expired token
    """
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.strip():
        logger.info("Admin route called without token", path=request.url.path)
        raise MissingTokenError()

    claims = AdminClaims.from_payload(verify_token(auth_header, settings=settings))
    request.state.admin = claims
    return claims


AdminUser = Annotated[AdminClaims, Depends(require_admin)]

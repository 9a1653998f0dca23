"""
Admin Authentication Service.

Checks credentials against the single configured admin identity and
issues signed access tokens.
"""
from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import Annotated

import structlog
from fastapi import Depends

from ..core.config import Settings, get_settings
from ..core.exceptions import AuthenticationError
from ..core.security import create_access_token

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class IssuedToken:
    """Result of a successful admin login."""

    access_token: str
    expires_in: int
    email: str
    name: str
    role: str = ADMIN_ROLE
    token_type: str = "bearer"


class AdminAuthService:
    """Credential check and token issuance for the admin panel."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def credentials_match(self, email: str, password: str) -> bool:
        """Email compares trimmed and case-insensitive; password compares exactly."""
        email_ok = email.strip().lower() == self.settings.ADMIN_EMAIL.strip().lower()
        password_ok = hmac.compare_digest(
            password.encode("utf-8"),
            self.settings.ADMIN_PASSWORD.encode("utf-8"),
        )
        return email_ok and password_ok

    def issue_token(self, email: str, password: str) -> IssuedToken:
        """
        Issue an admin token for matching credentials.

        Raises:
            AuthenticationError: email or password does not match
        """
        if not self.credentials_match(email, password):
            logger.warning("Failed admin login attempt", email=email)
            raise AuthenticationError()

        admin_email = self.settings.ADMIN_EMAIL
        token, expires_in = create_access_token(
            email=admin_email,
            settings=self.settings,
            role=ADMIN_ROLE,
        )
        logger.info("Admin logged in", email=admin_email)
        return IssuedToken(
            access_token=token,
            expires_in=expires_in,
            email=admin_email,
            name=self.settings.ADMIN_NAME,
        )


def get_admin_auth_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AdminAuthService:
    return AdminAuthService(settings)

"""Tests for the admin access-control dependency."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from fastapi import Request

from src.mediblues.core.config import Settings
from src.mediblues.core.exceptions import InvalidTokenError, MissingTokenError
from src.mediblues.core.rbac import AdminClaims, require_admin
from src.mediblues.core.security import create_access_token


@pytest.fixture
def mock_settings() -> Settings:
    return Settings(SECRET_KEY="test-secret-key-that-is-at-least-32-characters")


def _request(header: str | None) -> MagicMock:
    request = MagicMock(spec=Request)
    request.headers.get.return_value = header
    request.url.path = "/api/v1/admin/locations"
    request.state = MagicMock()
    return request


async def test_require_admin_returns_claims(mock_settings):
    token, _ = create_access_token(email="admin@mediblues.com", settings=mock_settings)
    request = _request(f"Bearer {token}")

    claims = await require_admin(request, settings=mock_settings)

    assert isinstance(claims, AdminClaims)
    assert claims.email == "admin@mediblues.com"
    assert claims.role == "admin"
    assert claims.expires_at > claims.issued_at
    assert request.state.admin is claims


@pytest.mark.parametrize("header", [None, "", "   "])
async def test_require_admin_missing_header(mock_settings, header):
    with pytest.raises(MissingTokenError) as exc:
        await require_admin(_request(header), settings=mock_settings)
    assert exc.value.error_code == "MISSING_TOKEN"


async def test_require_admin_expired_token(mock_settings):
    issued = datetime.now(UTC) - timedelta(days=2)
    token, _ = create_access_token(email="admin@mediblues.com", settings=mock_settings, issued_at=issued)

    with pytest.raises(InvalidTokenError) as exc:
        await require_admin(_request(f"Bearer {token}"), settings=mock_settings)
    assert exc.value.reason == "expired"


async def test_require_admin_rejects_non_admin_role(mock_settings):
    token, _ = create_access_token(email="someone@mediblues.com", settings=mock_settings, role="viewer")

    with pytest.raises(InvalidTokenError) as exc:
        await require_admin(_request(f"Bearer {token}"), settings=mock_settings)
    assert exc.value.reason == "malformed"


def test_claims_from_payload_requires_email():
    with pytest.raises(InvalidTokenError):
        AdminClaims.from_payload({"role": "admin", "iat": 1, "exp": 2})


def test_claims_fall_back_to_subject():
    claims = AdminClaims.from_payload({"sub": "admin@mediblues.com", "role": "admin", "iat": 1, "exp": 2})
    assert claims.email == "admin@mediblues.com"

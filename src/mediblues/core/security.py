"""Security helpers for admin JWT authentication.

Signs and verifies HS256 tokens using only the standard library. Tokens
are produced by the admin login flow and checked by the ``require_admin``
dependency on every protected route.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import re
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from .config import Settings
from .exceptions import InvalidTokenError

logger = structlog.get_logger(__name__)

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


def _base64url_encode(data: bytes) -> str:
    """Encode bytes using base64 URL-safe encoding without padding."""

    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")

def _base64url_decode(data: str) -> bytes:
    """Decode a base64url-encoded string, handling missing padding."""

    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)

def _sign(signing_input: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()
    return _base64url_encode(digest)

def _encode_jwt(payload: dict, *, secret: str, algorithm: str = "HS256") -> str:
    """Minimal HS256 JWT encoder using only standard library."""

    if algorithm != "HS256":
        raise ValueError("Only HS256 algorithm is supported in this implementation")

    header = {"alg": algorithm, "typ": "JWT"}

    header_json = json.dumps(header, separators=(",", ":"), sort_keys=True).encode("utf-8")
    payload_json = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")

    encoded_header = _base64url_encode(header_json)
    encoded_payload = _base64url_encode(payload_json)

    signing_input = f"{encoded_header}.{encoded_payload}".encode("ascii")
    return f"{encoded_header}.{encoded_payload}.{_sign(signing_input, secret)}"

def _decode_jwt(token: str, *, settings: Settings) -> dict[str, Any]:
    """Decode and validate an HS256 JWT.

    - Verifies the signature with SECRET_KEY
    - Ensures the header names HS256
    - Checks the exp claim against current UTC time
    """

    try:
        header_b64, payload_b64, signature_b64 = token.split(".")
    except ValueError as exc:
        raise InvalidTokenError("malformed") from exc

    try:
        header = json.loads(_base64url_decode(header_b64))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidTokenError("malformed") from exc
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        raise InvalidTokenError("malformed")

    signing_input = f"{header_b64}.{payload_b64}".encode("ascii", errors="replace")
    expected_sig_b64 = _sign(signing_input, settings.SECRET_KEY)

    # Constant-time comparison
    if not hmac.compare_digest(signature_b64.encode("ascii", errors="replace"), expected_sig_b64.encode("ascii")):
        raise InvalidTokenError("bad_signature")

    try:
        payload = json.loads(_base64url_decode(payload_b64))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidTokenError("malformed") from exc
    if not isinstance(payload, dict):
        raise InvalidTokenError("malformed")

    exp = payload.get("exp")
    if not isinstance(exp, int):
        raise InvalidTokenError("malformed")

    now_ts = int(datetime.now(UTC).timestamp())
    if now_ts >= exp:
        raise InvalidTokenError("expired")

    return payload

def strip_bearer(value: str) -> str:
    """Remove an optional, case-insensitive ``Bearer`` prefix."""

    return _BEARER_PREFIX.sub("", value.strip(), count=1).strip()

def create_access_token(
    *,
    email: str,
    settings: Settings,
    role: str = "admin",
    issued_at: datetime | None = None,
) -> tuple[str, int]:
    """Create a signed admin token.

    Returns:
        The encoded token and its lifetime in seconds.
    """

    now = issued_at or datetime.now(UTC)
    expire_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": email,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + expire_delta).timestamp()),
    }
    token = _encode_jwt(claims, secret=settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token, int(expire_delta.total_seconds())

def verify_token(token: str, *, settings: Settings) -> dict[str, Any]:
    """Verify a token (with or without ``Bearer`` prefix) and return its claims.

    Raises:
        InvalidTokenError: malformed, tampered or expired token.
    """

    raw = strip_bearer(token)
    if not raw:
        raise InvalidTokenError("malformed")
    try:
        return _decode_jwt(raw, settings=settings)
    except InvalidTokenError as exc:
        logger.warning("Token verification failed", reason=exc.reason)
        raise

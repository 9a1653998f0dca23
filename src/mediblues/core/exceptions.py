"""
Domain errors.

Repositories and services raise these; endpoints let them propagate and
the handler in ``main`` turns them into the JSON error envelope. Each
class carries its HTTP status and machine-readable code as class
attributes, so subclasses only override what differs.
"""

from typing import Any


class AppException(Exception):
    """Base class for every error that maps onto an HTTP response."""

    status_code: int = 500
    error_code: str = "APP_ERROR"
    default_message: str = "Application error"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# 4xx

class BadRequestError(AppException):
    status_code = 400
    error_code = "BAD_REQUEST"
    default_message = "Invalid request"


class ValidationError(BadRequestError):
    """A required field is missing or blank, or a value is malformed."""

    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(
        self,
        message: str | None = None,
        fields: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if fields:
            details["fields"] = fields
        super().__init__(message=message, details=details)


class ReferentialError(BadRequestError):
    """A foreign key in the request points at a row that does not exist."""

    error_code = "INVALID_REFERENCE"

    def __init__(
        self,
        resource_type: str,
        resource_id: str | int | None = None,
        message: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(
            message=message or f"Invalid {resource_type}: {resource_id}",
            details=details,
        )


class UnauthorizedError(AppException):
    status_code = 401
    error_code = "UNAUTHORIZED"
    default_message = "Authentication required"


class AuthenticationError(UnauthorizedError):
    error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class MissingTokenError(UnauthorizedError):
    error_code = "MISSING_TOKEN"
    default_message = "No token provided"


class InvalidTokenError(UnauthorizedError):
    """Token could not be verified.

    ``reason`` (``malformed``, ``bad_signature`` or ``expired``) is kept
    for logging; clients only ever see ``INVALID_TOKEN``.
    """

    error_code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"
    REASONS = ("malformed", "bad_signature", "expired")

    def __init__(self, reason: str, message: str | None = None) -> None:
        if reason not in self.REASONS:
            raise ValueError(f"Unknown token failure reason: {reason}")
        self.reason = reason
        super().__init__(message=message)


class NotFoundError(AppException):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Resource not found"

    def __init__(
        self,
        message: str | None = None,
        resource_type: str | None = None,
        resource_id: str | int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details)


class ConflictError(AppException):
    """Unique value already taken (409)."""

    status_code = 409
    error_code = "CONFLICT"
    default_message = "Resource conflict"


# 5xx

class InternalServerError(AppException):
    error_code = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"

"""
Response envelopes shared by every endpoint.

Successful calls return ``{"success": true, "message", "data", "meta"}``;
list endpoints add ``pagination``. Errors return
``{"success": false, "error": {"code", "message", "details"}, "meta"}``.
"""
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel, Field

from .exceptions import AppException

T = TypeVar("T")

API_VERSION = "v1"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _current_request_id() -> str | None:
    # Bound by RequestIDMiddleware for the lifetime of the request
    return structlog.contextvars.get_contextvars().get("request_id")


class ResponseMeta(BaseModel):
    request_id: str | None = Field(default_factory=_current_request_id)
    timestamp: datetime = Field(default_factory=_utc_now)
    version: str = API_VERSION


class GenericResponse(BaseModel, Generic[T]):
    """Single-payload envelope, e.g. ``GenericResponse[LocationResponse]``."""

    success: bool = True
    message: str
    data: T
    meta: ResponseMeta = Field(default_factory=ResponseMeta)


class PaginationMeta(BaseModel):
    """Offset/limit paging details for list responses."""

    total: int = Field(description="Rows matching the filters, ignoring paging")
    limit: int | None = Field(description="Page size; null for an unbounded list")
    offset: int = Field(ge=0)
    page: int = Field(ge=1, description="1-based page number")
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_total(cls, total: int, limit: int | None, offset: int = 0) -> "PaginationMeta":
        if not limit:
            page, total_pages, has_next = 1, 1, False
        else:
            page = offset // limit + 1
            total_pages = max(1, -(-total // limit))
            has_next = offset + limit < total
        return cls(
            total=total,
            limit=limit or None,
            offset=offset,
            page=page,
            total_pages=total_pages,
            has_next=has_next,
            has_previous=offset > 0,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: list[T]
    pagination: PaginationMeta
    meta: ResponseMeta = Field(default_factory=ResponseMeta)


class ErrorDetail(BaseModel):
    code: str = Field(description="Machine-readable error code, e.g. NOT_FOUND")
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response produced by the exception handlers."""

    success: bool = False
    error: ErrorDetail
    meta: ResponseMeta = Field(default_factory=ResponseMeta)

    @classmethod
    def from_exception(cls, exc: AppException) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=exc.error_code, message=exc.message, details=exc.details))


class HealthCheck(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    latency_ms: float | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    timestamp: datetime = Field(default_factory=_utc_now)
    checks: dict[str, HealthCheck] = Field(default_factory=dict)

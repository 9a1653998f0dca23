"""Probes, middleware headers and the error envelope."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from src.mediblues.core.config import get_settings

if TYPE_CHECKING:
    from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_reports_service_and_database(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    settings = get_settings()
    assert body["status"] == "healthy"
    assert body["service"] == settings.APP_NAME
    assert body["version"] == settings.APP_VERSION
    assert body["environment"] == "test"
    assert body["checks"]["database"]["status"] == "healthy"
    assert body["checks"]["database"]["latency_ms"] >= 0


@pytest.mark.asyncio
@pytest.mark.parametrize(("path", "status"), [("/api/v1/ready", "ready"), ("/api/v1/live", "alive")])
async def test_probes(client: AsyncClient, path: str, status: str) -> None:
    response = await client.get(path)

    assert response.status_code == 200
    assert response.json() == {"status": status}


@pytest.mark.asyncio
async def test_request_id_is_echoed_in_header_and_body(client: AsyncClient) -> None:
    response = await client.get("/api/v1/locations/999999", headers={"X-Request-ID": "trace-123"})

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == "trace-123"
    assert response.json()["meta"]["request_id"] == "trace-123"


@pytest.mark.asyncio
async def test_request_id_is_generated_when_absent(client: AsyncClient) -> None:
    response = await client.get("/api/v1/live")

    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/api/v1/live")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]


@pytest.mark.asyncio
async def test_not_found_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/locations/999999")

    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"
    assert body["error"]["details"] == {"resource_type": "location", "resource_id": 999999}


@pytest.mark.asyncio
async def test_schema_errors_return_422_with_field_paths(client: AsyncClient) -> None:
    response = await client.get("/api/v1/doctors", params={"limit": 0})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["validation_errors"][0]["field"] == "query.limit"

"""Tests for location endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

if TYPE_CHECKING:
    from httpx import AsyncClient


@pytest_asyncio.fixture
async def sample_location(client: AsyncClient, auth_headers: dict[str, str], location_payload: dict) -> int:
    response = await client.post("/api/v1/locations", json=location_payload, headers=auth_headers)
    return response.json()["data"]["id"]


@pytest.mark.asyncio
async def test_create_location(client: AsyncClient, auth_headers: dict[str, str], location_payload: dict) -> None:
    response = await client.post("/api/v1/locations", json=location_payload, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["data"]["name"] == "Mediblues Indiranagar"
    assert data["data"]["enabled"] is True
    assert data["data"]["doctors"] == []
    assert data["data"]["departments"] == []


@pytest.mark.asyncio
async def test_create_requires_token_and_does_not_write(client: AsyncClient, location_payload: dict) -> None:
    response = await client.post("/api/v1/locations", json=location_payload)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "MISSING_TOKEN"
    listing = await client.get("/api/v1/locations")
    assert listing.json()["data"] == []


@pytest.mark.asyncio
async def test_duplicate_name_returns_conflict(
    client: AsyncClient, auth_headers: dict[str, str], location_payload: dict, sample_location: int
) -> None:
    response = await client.post("/api/v1/locations", json=location_payload, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_get_location(client: AsyncClient, sample_location: int) -> None:
    response = await client.get(f"/api/v1/locations/{sample_location}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == sample_location


@pytest.mark.asyncio
async def test_get_missing_location(client: AsyncClient) -> None:
    response = await client.get("/api/v1/locations/9999")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_partial_update(client: AsyncClient, auth_headers: dict[str, str], sample_location: int) -> None:
    response = await client.patch(
        f"/api/v1/locations/{sample_location}",
        json={"phone": "080-9999-0000"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["phone"] == "080-9999-0000"
    assert data["email"] == "indiranagar@mediblues.com"


@pytest.mark.asyncio
async def test_disabled_location_only_visible_to_admin(
    client: AsyncClient, auth_headers: dict[str, str], sample_location: int
) -> None:
    await client.patch(f"/api/v1/locations/{sample_location}", json={"enabled": False}, headers=auth_headers)

    public = await client.get("/api/v1/locations")
    simple = await client.get("/api/v1/locations/simple")
    admin = await client.get("/api/v1/admin/locations", headers=auth_headers)

    assert public.json()["data"] == []
    assert simple.json()["data"] == []
    assert [loc["id"] for loc in admin.json()["data"]] == [sample_location]
    assert (await client.get(f"/api/v1/locations/{sample_location}")).status_code == 404


@pytest.mark.asyncio
async def test_admin_list_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/admin/locations")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_delete_cascades_to_doctors(
    client: AsyncClient, auth_headers: dict[str, str], sample_location: int
) -> None:
    doctor = await client.post(
        "/api/v1/doctors",
        json={"name": "Dr. Arjun Rao", "location_id": sample_location, "specializations": ["Cardiology"]},
        headers=auth_headers,
    )
    doctor_id = doctor.json()["data"]["id"]

    response = await client.delete(f"/api/v1/locations/{sample_location}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] is None
    assert (await client.get(f"/api/v1/doctors/{doctor_id}")).status_code == 404

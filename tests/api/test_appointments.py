"""Tests for appointment endpoints (public booking, admin management)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

if TYPE_CHECKING:
    from httpx import AsyncClient


@pytest_asyncio.fixture
async def location_name(client: AsyncClient, auth_headers: dict[str, str], location_payload: dict) -> str:
    await client.post("/api/v1/locations", json=location_payload, headers=auth_headers)
    return location_payload["name"]


@pytest_asyncio.fixture
async def package_id(client: AsyncClient, auth_headers: dict[str, str], package_payload: dict) -> int:
    response = await client.post("/api/v1/packages", json=package_payload, headers=auth_headers)
    return response.json()["data"]["id"]


def _booking(location: str, **overrides) -> dict:
    payload = {
        "full_name": "Priya Menon",
        "mobile_number": "9876543210",
        "email": "priya@example.com",
        "location": location,
        "reason_for_visit": "Knee pain",
        "message": "Morning slot please",
        "preferred_date": "2026-11-03",
        "preferred_time": "10:00",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_book_normal_appointment(client: AsyncClient, location_name: str) -> None:
    response = await client.post("/api/v1/appointments", json=_booking(location_name))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == 1
    assert data["status"] == "pending"
    assert data["location"]["name"] == location_name
    assert data["department"] is None
    assert data["package"] is None


@pytest.mark.asyncio
async def test_book_with_unknown_location(client: AsyncClient, location_name: str) -> None:
    response = await client.post("/api/v1/appointments", json=_booking("Atlantis"))

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid location"


@pytest.mark.asyncio
async def test_book_with_missing_fields(client: AsyncClient, location_name: str) -> None:
    response = await client.post("/api/v1/appointments", json=_booking(location_name, message=None))

    assert response.status_code == 400
    assert response.json()["error"]["details"]["fields"] == ["message"]


@pytest.mark.asyncio
async def test_book_package(client: AsyncClient, package_id: int) -> None:
    response = await client.post(
        "/api/v1/appointments",
        json={
            "full_name": "Rahul Das",
            "mobile_number": "9000000000",
            "package_id": package_id,
            "notes": "Prefer early morning",
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == 2
    assert data["reason_for_visit"] == "Health Check Package: Executive Health Check"
    assert data["message"] == "Prefer early morning"
    assert data["package"] == {"id": package_id, "name": "Executive Health Check"}


@pytest.mark.asyncio
async def test_listing_requires_admin(client: AsyncClient) -> None:
    response = await client.get("/api/v1/appointments")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_admin_list_filters(
    client: AsyncClient, auth_headers: dict[str, str], location_name: str, package_id: int
) -> None:
    await client.post("/api/v1/appointments", json=_booking(location_name))
    await client.post(
        "/api/v1/appointments",
        json={"full_name": "Rahul Das", "mobile_number": "9000000000", "package_id": package_id},
    )

    everything = await client.get("/api/v1/appointments", headers=auth_headers)
    packages = await client.get("/api/v1/appointments", params={"type": 2}, headers=auth_headers)
    confirmed = await client.get("/api/v1/appointments", params={"status": "confirmed"}, headers=auth_headers)

    assert everything.json()["pagination"]["total"] == 2
    assert everything.json()["pagination"]["limit"] == 10
    assert [a["type"] for a in packages.json()["data"]] == [2]
    assert confirmed.json()["data"] == []


@pytest.mark.asyncio
async def test_admin_list_rejects_unknown_type(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.get("/api/v1/appointments", params={"type": 3}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_and_delete(client: AsyncClient, auth_headers: dict[str, str], location_name: str) -> None:
    created = await client.post("/api/v1/appointments", json=_booking(location_name))
    appointment_id = created.json()["data"]["id"]

    updated = await client.patch(
        f"/api/v1/appointments/{appointment_id}",
        json={"status": "confirmed", "preferred_time": "11:30"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "confirmed"
    assert updated.json()["data"]["preferred_time"] == "11:30"

    fetched = await client.get(f"/api/v1/appointments/{appointment_id}", headers=auth_headers)
    assert fetched.json()["data"]["status"] == "confirmed"

    deleted = await client.delete(f"/api/v1/appointments/{appointment_id}", headers=auth_headers)
    assert deleted.status_code == 200
    missing = await client.get(f"/api/v1/appointments/{appointment_id}", headers=auth_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_with_unknown_status(client: AsyncClient, auth_headers: dict[str, str], location_name: str) -> None:
    created = await client.post("/api/v1/appointments", json=_booking(location_name))
    response = await client.patch(
        f"/api/v1/appointments/{created.json()['data']['id']}",
        json={"status": "lost"},
        headers=auth_headers,
    )
    assert response.status_code == 422

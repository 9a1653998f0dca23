"""Tests for doctor endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

if TYPE_CHECKING:
    from httpx import AsyncClient


@pytest_asyncio.fixture
async def location_id(client: AsyncClient, auth_headers: dict[str, str], location_payload: dict) -> int:
    response = await client.post("/api/v1/locations", json=location_payload, headers=auth_headers)
    return response.json()["data"]["id"]


@pytest_asyncio.fixture
async def department_id(client: AsyncClient, auth_headers: dict[str, str]) -> int:
    response = await client.post("/api/v1/departments", json={"name": "Orthopaedics"}, headers=auth_headers)
    return response.json()["data"]["id"]


async def _create(client: AsyncClient, headers: dict[str, str], **payload) -> dict:
    response = await client.post("/api/v1/doctors", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_create_doctor(
    client: AsyncClient, auth_headers: dict[str, str], location_id: int, department_id: int
) -> None:
    data = await _create(
        client,
        auth_headers,
        name="Dr. John Smith",
        qualifications=["MBBS", "MS (Ortho)"],
        experience=14,
        location_id=location_id,
        department_ids=[department_id, 999],
        specializations=["Joint replacement", "Sports injuries"],
    )

    assert data["location"]["id"] == location_id
    assert data["availability"] == "available"
    assert [d["id"] for d in data["departments"]] == [department_id]
    assert data["specializations"] == ["Joint replacement", "Sports injuries"]


@pytest.mark.asyncio
async def test_create_with_unknown_location(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post(
        "/api/v1/doctors", json={"name": "Dr. Lost", "location_id": 31337}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REFERENCE"


@pytest.mark.asyncio
async def test_create_without_location_is_schema_error(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post("/api/v1/doctors", json={"name": "Dr. Lost"}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_search_by_name_or_specialization(
    client: AsyncClient, auth_headers: dict[str, str], location_id: int, department_id: int
) -> None:
    by_name = await _create(client, auth_headers, name="Dr. John Smith", location_id=location_id)
    by_focus = await _create(
        client,
        auth_headers,
        name="Dr. Asha Rao",
        location_id=location_id,
        department_ids=[department_id],
        specializations=["Smith fracture fixation"],
    )
    await _create(client, auth_headers, name="Dr. Ravi Kumar", location_id=location_id)

    response = await client.get("/api/v1/doctors/search", params={"q": "SMITH"})
    assert response.status_code == 200
    assert [d["id"] for d in response.json()["data"]] == [by_focus["id"], by_name["id"]]

    filtered = await client.get("/api/v1/doctors/search", params={"q": "smith", "department_id": department_id})
    assert [d["id"] for d in filtered.json()["data"]] == [by_focus["id"]]


@pytest.mark.asyncio
async def test_list_is_paginated(client: AsyncClient, auth_headers: dict[str, str], location_id: int) -> None:
    for years in (5, 20, 10):
        await _create(client, auth_headers, name=f"Dr. {years}", experience=years, location_id=location_id)

    response = await client.get("/api/v1/doctors", params={"limit": 2})

    body = response.json()
    assert [d["experience"] for d in body["data"]] == [20, 10]
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["has_next"] is True
    assert body["pagination"]["total_pages"] == 2


@pytest.mark.asyncio
async def test_list_rejects_oversized_page(client: AsyncClient) -> None:
    response = await client.get("/api/v1/doctors", params={"limit": 101})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_replaces_specializations(
    client: AsyncClient, auth_headers: dict[str, str], location_id: int
) -> None:
    doctor = await _create(
        client, auth_headers, name="Dr. A", location_id=location_id, specializations=["Old"]
    )

    response = await client.patch(
        f"/api/v1/doctors/{doctor['id']}",
        json={"specializations": ["New", "Newer"], "availability": "on_leave"},
        headers=auth_headers,
    )

    data = response.json()["data"]
    assert data["specializations"] == ["New", "Newer"]
    assert data["availability"] == "on_leave"
    assert data["name"] == "Dr. A"


@pytest.mark.asyncio
async def test_delete_doctor(client: AsyncClient, auth_headers: dict[str, str], location_id: int) -> None:
    doctor = await _create(client, auth_headers, name="Dr. Gone", location_id=location_id)

    response = await client.delete(f"/api/v1/doctors/{doctor['id']}", headers=auth_headers)
    assert response.status_code == 200
    missing = await client.delete(f"/api/v1/doctors/{doctor['id']}", headers=auth_headers)
    assert missing.status_code == 404

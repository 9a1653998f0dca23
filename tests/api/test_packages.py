"""Tests for health-check package endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio

if TYPE_CHECKING:
    from httpx import AsyncClient


@pytest_asyncio.fixture
async def package_id(client: AsyncClient, auth_headers: dict[str, str], package_payload: dict) -> int:
    response = await client.post("/api/v1/packages", json=package_payload, headers=auth_headers)
    return response.json()["data"]["id"]


@pytest.mark.asyncio
async def test_create_package(client: AsyncClient, auth_headers: dict[str, str], package_payload: dict) -> None:
    response = await client.post("/api/v1/packages", json=package_payload, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["price"] == 4999.0
    assert data["discount_price"] == 3999.5
    assert data["age_range"] == "All ages"
    assert [t["name"] for t in data["tests"]] == ["Lipid Profile", "HbA1c"]


@pytest.mark.asyncio
async def test_negative_price_is_rejected(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post("/api/v1/packages", json={"name": "Bad", "price": -1}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_public_list_pages(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    for n in range(3):
        await client.post("/api/v1/packages", json={"name": f"Package {n}", "price": 100 + n}, headers=auth_headers)

    response = await client.get("/api/v1/packages", params={"page": 2, "limit": 2})

    body = response.json()
    assert [p["name"] for p in body["data"]] == ["Package 0"]
    assert body["pagination"]["page"] == 2
    assert body["pagination"]["offset"] == 2
    assert body["pagination"]["has_previous"] is True
    assert body["pagination"]["has_next"] is False


@pytest.mark.asyncio
async def test_inactive_package_hidden_from_public(
    client: AsyncClient, auth_headers: dict[str, str], package_id: int
) -> None:
    await client.patch(f"/api/v1/packages/{package_id}", json={"is_active": False}, headers=auth_headers)

    assert (await client.get(f"/api/v1/packages/{package_id}")).status_code == 404
    assert (await client.get("/api/v1/packages")).json()["data"] == []
    admin = await client.get("/api/v1/admin/packages", headers=auth_headers)
    assert [p["id"] for p in admin.json()["data"]] == [package_id]


@pytest.mark.asyncio
async def test_update_replaces_tests(client: AsyncClient, auth_headers: dict[str, str], package_id: int) -> None:
    response = await client.patch(
        f"/api/v1/packages/{package_id}",
        json={"tests": [{"name": "Vitamin D", "unit": "ng/mL"}]},
        headers=auth_headers,
    )

    data = response.json()["data"]
    assert [t["name"] for t in data["tests"]] == ["Vitamin D"]
    assert data["name"] == "Executive Health Check"


@pytest.mark.asyncio
async def test_update_with_null_tests_clears_them(
    client: AsyncClient, auth_headers: dict[str, str], package_id: int
) -> None:
    response = await client.patch(f"/api/v1/packages/{package_id}", json={"tests": None}, headers=auth_headers)
    assert response.json()["data"]["tests"] == []


@pytest.mark.asyncio
async def test_delete_package(client: AsyncClient, auth_headers: dict[str, str], package_id: int) -> None:
    response = await client.delete(f"/api/v1/packages/{package_id}", headers=auth_headers)
    assert response.status_code == 200
    assert (await client.get("/api/v1/admin/packages", headers=auth_headers)).json()["data"] == []

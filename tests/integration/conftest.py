"""Shared builders for repository integration tests."""
from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.mediblues.models import Department, Doctor, Location
from src.mediblues.repositories import DepartmentRepository, DoctorRepository, LocationRepository


@pytest.fixture
def make_location(db_session: AsyncSession):
    repo = LocationRepository(db_session)
    counter = {"n": 0}

    async def _make(**overrides) -> Location:
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "name": f"Branch {n}",
            "address": f"{n} MG Road",
            "phone": f"080-1000-{n:04d}",
            "email": f"branch{n}@mediblues.com",
        }
        fields.update(overrides)
        return await repo.create(fields)

    return _make


@pytest.fixture
def make_department(db_session: AsyncSession):
    repo = DepartmentRepository(db_session)
    counter = {"n": 0}

    async def _make(location_ids=None, **overrides) -> Department:
        counter["n"] += 1
        fields = {"name": f"Department {counter['n']}"}
        fields.update(overrides)
        return await repo.create_department(fields, location_ids=location_ids)

    return _make


@pytest.fixture
def make_doctor(db_session: AsyncSession):
    repo = DoctorRepository(db_session)

    async def _make(location_id: int, name: str = "Dr. Meera Nair", department_ids=None, specializations=None, **overrides) -> Doctor:
        fields = {"name": name, "location_id": location_id}
        fields.update(overrides)
        return await repo.create_doctor(fields, department_ids=department_ids, specializations=specializations)

    return _make

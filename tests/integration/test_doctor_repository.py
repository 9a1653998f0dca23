"""Integration tests for DoctorRepository.

Coverage:
- create with department links and specializations
- invalid location reference
- search by name OR specialization, with department and location filters
- replacement of specializations and department links on update
- experience ordering of the paginated list
"""
from __future__ import annotations

import pytest

from src.mediblues.core.exceptions import NotFoundError, ReferentialError, ValidationError
from src.mediblues.models import DoctorAvailability
from src.mediblues.repositories import DoctorRepository


class TestCreate:
    async def test_creates_with_relations(self, db_session, make_location, make_department, make_doctor):
        location = await make_location()
        department = await make_department()

        doctor = await make_doctor(
            location.id,
            department_ids=[department.id, department.id, 777],
            specializations=["  Cardiology ", "", "Echocardiography"],
            experience=12,
        )

        assert doctor.location.id == location.id
        assert [d.id for d in doctor.departments] == [department.id]
        assert [s.specialization for s in doctor.specializations] == ["Cardiology", "Echocardiography"]
        assert doctor.availability == DoctorAvailability.AVAILABLE

    async def test_unknown_location_is_referential_error(self, db_session):
        with pytest.raises(ReferentialError) as exc:
            await DoctorRepository(db_session).create_doctor({"name": "Dr. Ghost", "location_id": 4040})
        assert exc.value.details == {"resource_type": "location", "resource_id": 4040}

    async def test_location_is_required(self, db_session):
        with pytest.raises(ValidationError):
            await DoctorRepository(db_session).create_doctor({"name": "Dr. Nowhere"})


class TestSearch:
    async def test_matches_name_or_specialization_once(self, db_session, make_location, make_doctor):
        location = await make_location()
        by_name = await make_doctor(location.id, name="Dr. John Smith", specializations=["Orthopaedics"])
        by_specialization = await make_doctor(
            location.id, name="Dr. Asha Rao", specializations=["Smith fracture repair"]
        )
        both = await make_doctor(
            location.id, name="Dr. Carol Smith", specializations=["Smith fracture repair", "SMITH procedures"]
        )
        await make_doctor(location.id, name="Dr. Ravi Kumar", specializations=["Dermatology"])

        results = await DoctorRepository(db_session).search("smith")

        assert [d.id for d in results] == [both.id, by_specialization.id, by_name.id]

    async def test_wildcards_are_literal(self, db_session, make_location, make_doctor):
        location = await make_location()
        await make_doctor(location.id, name="Dr. Percy Shah")

        assert await DoctorRepository(db_session).search("%") == []

    async def test_department_and_location_filters(
        self, db_session, make_location, make_department, make_doctor
    ):
        north = await make_location()
        south = await make_location()
        cardiology = await make_department()
        in_both = await make_doctor(north.id, name="Dr. A", department_ids=[cardiology.id])
        await make_doctor(south.id, name="Dr. B", department_ids=[cardiology.id])
        await make_doctor(north.id, name="Dr. C")

        results = await DoctorRepository(db_session).search(
            department_id=cardiology.id, location_id=north.id
        )

        assert [d.id for d in results] == [in_both.id]

    async def test_blank_query_returns_everyone(self, db_session, make_location, make_doctor):
        location = await make_location()
        await make_doctor(location.id, name="Dr. A")
        await make_doctor(location.id, name="Dr. B")

        assert len(await DoctorRepository(db_session).search("   ")) == 2


class TestUpdate:
    async def test_replaces_given_associations(self, db_session, make_location, make_department, make_doctor):
        location = await make_location()
        old_department = await make_department()
        new_department = await make_department()
        doctor = await make_doctor(
            location.id, department_ids=[old_department.id], specializations=["Old focus"]
        )

        updated = await DoctorRepository(db_session).update_doctor(
            doctor.id,
            {"experience": 20},
            department_ids=[new_department.id],
            specializations=["New focus", "Second focus"],
        )

        assert updated.experience == 20
        assert [d.id for d in updated.departments] == [new_department.id]
        assert [s.specialization for s in updated.specializations] == ["New focus", "Second focus"]

    async def test_omitted_associations_are_kept(self, db_session, make_location, make_department, make_doctor):
        location = await make_location()
        department = await make_department()
        doctor = await make_doctor(location.id, department_ids=[department.id], specializations=["Focus"])

        updated = await DoctorRepository(db_session).update_doctor(doctor.id, {"name": "Dr. Renamed"})

        assert updated.name == "Dr. Renamed"
        assert [d.id for d in updated.departments] == [department.id]
        assert [s.specialization for s in updated.specializations] == ["Focus"]

    async def test_moving_to_unknown_location_fails(self, db_session, make_location, make_doctor):
        location = await make_location()
        doctor = await make_doctor(location.id)
        with pytest.raises(ReferentialError):
            await DoctorRepository(db_session).update_doctor(doctor.id, {"location_id": 555})

    async def test_delete_missing_doctor(self, db_session):
        with pytest.raises(NotFoundError):
            await DoctorRepository(db_session).delete(321)


async def test_list_orders_by_experience(db_session, make_location, make_doctor):
    location = await make_location()
    junior = await make_doctor(location.id, name="Dr. Junior", experience=3)
    unknown = await make_doctor(location.id, name="Dr. Unknown")
    senior = await make_doctor(location.id, name="Dr. Senior", experience=25)

    doctors, total = await DoctorRepository(db_session).list_doctors(limit=10)

    assert total == 3
    assert [d.id for d in doctors] == [senior.id, junior.id, unknown.id]


async def test_list_paginates(db_session, make_location, make_doctor):
    location = await make_location()
    for years in range(5):
        await make_doctor(location.id, name=f"Dr. {years}", experience=years)

    page, total = await DoctorRepository(db_session).list_doctors(limit=2, offset=2)

    assert total == 5
    assert [d.experience for d in page] == [2, 1]

"""Integration tests for contact info and banner repositories."""
from __future__ import annotations

import pytest

from src.mediblues.core.exceptions import NotFoundError, ValidationError
from src.mediblues.models import ContactType
from src.mediblues.repositories import BannerRepository, ContactInfoRepository
from src.mediblues.repositories.contact_repository import validate_contact_value


@pytest.mark.parametrize(
    "value",
    ["+91 98765 43210", "080-4000-1000", "(080) 40001000", "1800123456"],
)
def test_valid_mobile_numbers(value):
    assert validate_contact_value(ContactType.MOBILE, f" {value} ") == value


@pytest.mark.parametrize("value", ["12345", "call-me-now", "98765 4321x"])
def test_invalid_mobile_numbers(value):
    with pytest.raises(ValidationError):
        validate_contact_value(ContactType.MOBILE, value)


@pytest.mark.parametrize("value", ["care@mediblues", "care at mediblues.com", "@mediblues.com"])
def test_invalid_emails(value):
    with pytest.raises(ValidationError):
        validate_contact_value(ContactType.EMAIL, value)


class TestContactInfo:
    async def test_create_validates_value_against_type(self, db_session):
        repo = ContactInfoRepository(db_session)
        entry = await repo.create({"contact_type": "email", "contact_value": " care@mediblues.com "})
        assert entry.contact_type == ContactType.EMAIL
        assert entry.contact_value == "care@mediblues.com"

        with pytest.raises(ValidationError):
            await repo.create({"contact_type": "mobile", "contact_value": "care@mediblues.com"})

    async def test_unknown_type_is_rejected(self, db_session):
        with pytest.raises(ValidationError) as exc:
            await ContactInfoRepository(db_session).create({"contact_type": "fax", "contact_value": "123"})
        assert exc.value.details["fields"] == ["contact_type"]

    async def test_changing_type_revalidates_stored_value(self, db_session):
        repo = ContactInfoRepository(db_session)
        entry = await repo.create({"contact_type": "mobile", "contact_value": "1800-123-4567"})

        with pytest.raises(ValidationError):
            await repo.update(entry.id, {"contact_type": "email"})

        updated = await repo.update(
            entry.id, {"contact_type": "email", "contact_value": "help@mediblues.com"}
        )
        assert updated.contact_type == ContactType.EMAIL

    async def test_empty_update_is_rejected(self, db_session):
        repo = ContactInfoRepository(db_session)
        entry = await repo.create({"contact_type": "email", "contact_value": "a@b.co"})
        with pytest.raises(ValidationError):
            await repo.update(entry.id, {})

    async def test_public_list_shows_active_only(self, db_session):
        repo = ContactInfoRepository(db_session)
        shown = await repo.create({"contact_type": "email", "contact_value": "a@b.co"})
        await repo.create({"contact_type": "email", "contact_value": "old@b.co", "is_active": False})

        assert [e.id for e in await repo.list_active()] == [shown.id]
        assert len(await repo.list_all()) == 2


class TestBanners:
    async def test_hero_filter_and_visibility(self, db_session):
        repo = BannerRepository(db_session)
        hero = await repo.create({"title": "Welcome", "image": "/img/hero.jpg", "is_hero": True})
        slide = await repo.create({"title": "Offer", "image": "/img/offer.jpg"})
        hidden = await repo.create({"title": "Old", "image": "/img/old.jpg", "is_active": False})

        assert [b.id for b in await repo.list_banners(hero=True)] == [hero.id]
        assert [b.id for b in await repo.list_banners(hero=False)] == [slide.id]
        assert {b.id for b in await repo.list_banners(include_inactive=True)} == {hero.id, slide.id, hidden.id}
        with pytest.raises(NotFoundError):
            await repo.get_banner(hidden.id)

    async def test_image_is_required(self, db_session):
        with pytest.raises(ValidationError):
            await BannerRepository(db_session).create({"title": "No picture"})

    async def test_empty_update_is_rejected(self, db_session):
        repo = BannerRepository(db_session)
        banner = await repo.create({"title": "Welcome", "image": "/img/hero.jpg"})
        with pytest.raises(ValidationError):
            await repo.update(banner.id, {})

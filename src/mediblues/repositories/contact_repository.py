"""
Contact Info Repository.

Contact values are validated against their type: mobile numbers must hold
at least ten digits/punctuation characters once whitespace is removed,
email addresses must look like ``local@domain.tld``.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..core.exceptions import ValidationError
from ..models.contact import ContactInfo
from ..models.enums import ContactType
from .base import CrudRepository, _is_blank

logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"^[\d\s\-+()]{10,}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def parse_contact_type(value: ContactType | str) -> ContactType:
    try:
        return ContactType(value)
    except ValueError as exc:
        raise ValidationError(
            message="contact_type must be either 'email' or 'mobile'",
            fields=["contact_type"],
        ) from exc


def validate_contact_value(contact_type: ContactType, value: str) -> str:
    """Return the trimmed value, or raise ValidationError when malformed."""
    value = value.strip()
    if contact_type is ContactType.MOBILE:
        if not MOBILE_PATTERN.match(re.sub(r"\s", "", value)):
            raise ValidationError(message="Invalid mobile number format", fields=["contact_value"])
    elif not EMAIL_PATTERN.match(value):
        raise ValidationError(message="Invalid email format", fields=["contact_value"])
    return value


class ContactInfoRepository(CrudRepository[ContactInfo]):
    """Repository for ContactInfo entity operations."""

    model = ContactInfo
    resource_name = "Contact info"
    required_fields = ("contact_type", "contact_value")

    async def list_active(self) -> Sequence[ContactInfo]:
        """Active entries in creation order (public listing)."""
        return await self.find_all(
            ContactInfo.is_active.is_(True),
            order_by=(ContactInfo.created_at.asc(), ContactInfo.id.asc()),
        )

    async def list_all(self) -> Sequence[ContactInfo]:
        """Every entry, newest first (admin listing)."""
        return await self.find_all(
            order_by=(ContactInfo.created_at.desc(), ContactInfo.id.desc()),
        )

    async def create(self, fields: Mapping[str, Any]) -> ContactInfo:
        values = dict(fields)
        missing = [name for name in self.required_fields if _is_blank(values.get(name))]
        if missing:
            raise ValidationError(message="contact_type and contact_value are required", fields=missing)
        values["contact_type"] = parse_contact_type(values["contact_type"])
        values["contact_value"] = validate_contact_value(values["contact_type"], values["contact_value"])
        return await super().create(values)

    async def update(self, key: int, fields: Mapping[str, Any]) -> ContactInfo:
        if not fields:
            raise ValidationError(message="No fields to update")
        values = dict(fields)
        if "contact_type" in values or "contact_value" in values:
            current = await self.get_or_raise(key)
            if values.get("contact_type") is not None:
                values["contact_type"] = parse_contact_type(values["contact_type"])
            contact_type = values.get("contact_type") or current.contact_type
            value = values.get("contact_value", current.contact_value)
            if not _is_blank(value):
                validated = validate_contact_value(ContactType(contact_type), value)
                if "contact_value" in values:
                    values["contact_value"] = validated
        return await super().update(key, values)

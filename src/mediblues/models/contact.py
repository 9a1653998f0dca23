"""Contact info model (published helpline numbers and addresses)."""
from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from ..db.session import Base
from .enums import ContactType, enum_values


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class ContactInfo(Base):
    """Single contact entry: an email address or a mobile number."""

    __tablename__ = "contact_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    contact_type: Mapped[ContactType] = mapped_column(
        SQLEnum(
            ContactType,
            name="contact_type_enum",
            native_enum=False,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    contact_value: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

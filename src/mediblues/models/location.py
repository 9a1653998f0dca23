"""Location model.

A physical hospital branch. Doctors belong to exactly one location;
departments are offered at many locations.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.session import Base
from .associations import department_locations

if TYPE_CHECKING:
    from .department import Department
    from .doctor import Doctor


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class Location(Base):
    """Hospital branch. Hidden from public reads when ``enabled`` is False."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

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

    doctors: Mapped[list[Doctor]] = relationship(
        back_populates="location",
        passive_deletes=True,
        order_by="Doctor.id",
    )
    departments: Mapped[list[Department]] = relationship(
        secondary=department_locations,
        back_populates="locations",
        passive_deletes=True,
        order_by="Department.id",
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name='{self.name}')>"

"""Department model.

Medical department with rich page content. The list-valued content
fields are JSON columns that keep element order.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.session import Base
from .associations import department_locations, doctor_departments

if TYPE_CHECKING:
    from .doctor import Doctor
    from .location import Location


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class Department(Base):
    """Department offered at one or more locations."""

    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    heading: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Page content
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    achievements: Mapped[str | None] = mapped_column(Text, nullable=True)
    legacy: Mapped[str | None] = mapped_column(Text, nullable=True)
    treatments: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    facilities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    expertise: Mapped[str | None] = mapped_column(Text, nullable=True)
    why_choose: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    faqs: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

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

    locations: Mapped[list[Location]] = relationship(
        secondary=department_locations,
        back_populates="departments",
        passive_deletes=True,
        order_by="Location.id",
    )
    doctors: Mapped[list[Doctor]] = relationship(
        secondary=doctor_departments,
        back_populates="departments",
        passive_deletes=True,
        order_by="Doctor.id",
    )

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, name='{self.name}')>"

"""Doctor models.

Architecture:
    - Doctor: practitioner, belongs to one Location (NOT NULL, cascade on delete)
    - DoctorSpecialization: one row per specialization string, ordered by id
    - doctor_departments: junction to Department (see associations.py)
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.session import Base
from .associations import doctor_departments
from .enums import DoctorAvailability, enum_values

if TYPE_CHECKING:
    from .department import Department
    from .location import Location


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class Doctor(Base):
    """Practitioner listed in the directory."""

    __tablename__ = "doctors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    qualifications: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Years of experience",
    )
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    availability: Mapped[DoctorAvailability] = mapped_column(
        SQLEnum(
            DoctorAvailability,
            name="doctor_availability_enum",
            native_enum=False,
            values_callable=enum_values,
        ),
        nullable=False,
        default=DoctorAvailability.AVAILABLE,
    )

    location_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("locations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

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

    location: Mapped[Location] = relationship(back_populates="doctors")
    departments: Mapped[list[Department]] = relationship(
        secondary=doctor_departments,
        back_populates="doctors",
        passive_deletes=True,
        order_by="Department.id",
    )
    specializations: Mapped[list[DoctorSpecialization]] = relationship(
        back_populates="doctor",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DoctorSpecialization.id",
    )

    def __repr__(self) -> str:
        return f"<Doctor(id={self.id}, name='{self.name}')>"


class DoctorSpecialization(Base):
    """A single specialization label attached to a doctor."""

    __tablename__ = "doctor_specializations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    doctor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    specialization: Mapped[str] = mapped_column(String(255), nullable=False)

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

    doctor: Mapped[Doctor] = relationship(back_populates="specializations")

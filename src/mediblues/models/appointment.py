"""Appointment model.

Two kinds of booking share one table, distinguished by ``type``:

    1 (NORMAL)  - consultation at a location, optionally with a department/doctor
    2 (PACKAGE) - health-check package booking; ``package_id`` is set

Links to location/department/doctor are nulled when the target is deleted;
package bookings are removed together with their package.
"""
from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.session import Base
from .enums import AppointmentStatus, AppointmentType, enum_values

if TYPE_CHECKING:
    from .department import Department
    from .doctor import Doctor
    from .location import Location
    from .package import Package


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class Appointment(Base):
    """Patient booking request."""

    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_preferred_date", "preferred_date"),
        Index("ix_appointments_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    location_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
    )
    department_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
    )
    doctor_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("doctors.id", ondelete="SET NULL"),
        nullable=True,
    )
    package_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("packages.id", ondelete="CASCADE"),
        nullable=True,
    )

    reason_for_visit: Mapped[str | None] = mapped_column(Text, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    preferred_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    preferred_time: Mapped[str | None] = mapped_column(String(50), nullable=True)

    status: Mapped[AppointmentStatus] = mapped_column(
        SQLEnum(
            AppointmentStatus,
            name="appointment_status_enum",
            native_enum=False,
            values_callable=enum_values,
        ),
        nullable=False,
        default=AppointmentStatus.PENDING,
    )
    type: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=AppointmentType.NORMAL.value,
        comment="1 = normal appointment, 2 = package booking",
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

    location: Mapped[Location | None] = relationship()
    department: Mapped[Department | None] = relationship()
    doctor: Mapped[Doctor | None] = relationship()
    package: Mapped[Package | None] = relationship(back_populates="appointments")

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, type={self.type}, status={self.status})>"

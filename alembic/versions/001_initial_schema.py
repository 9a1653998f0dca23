"""Initial schema for the Mediblues directory.

Revision ID: 001
Revises: None
Create Date: 2026-10-18

Running ``alembic upgrade head`` on a clean database applies the whole
schema in one step.

Tables created
--------------
- locations            : Hospital branches; ``enabled`` hides a branch from public lists
- departments          : Clinical departments with page content (JSON lists for
                         treatments, facilities, why_choose, faqs)
- department_locations : Department <-> location junction
- doctors              : Doctor profiles; every doctor belongs to one location
- doctor_specializations: Free-text specializations, one row per value
- doctor_departments   : Doctor <-> department junction
- packages             : Health-check packages (Numeric(10, 2) prices)
- tests                : Tests included in a package
- appointments         : Consultation (type 1) and package (type 2) bookings
- banners              : Homepage banners; ``is_hero`` marks the hero slot
- contact_info         : Published email addresses and phone numbers

Delete behaviour
----------------
- Removing a location removes its doctors, and through them their
  specializations and department links.
- Removing a package removes its tests and its bookings.
- Appointments keep their row when a location, department or doctor goes
  away; the reference is set to NULL.
"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    ]


# ===========================================================================
# upgrade
# ===========================================================================

def upgrade() -> None:  # noqa: PLR0915 (too-many-statements)
    # =======================================================================
    # 1. LOCATIONS
    # =======================================================================
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # =======================================================================
    # 2. DEPARTMENTS
    # =======================================================================
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("heading", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
        # Page content
        sa.Column("overview", sa.Text(), nullable=True),
        sa.Column("achievements", sa.Text(), nullable=True),
        sa.Column("legacy", sa.Text(), nullable=True),
        sa.Column("treatments", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("facilities", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("expertise", sa.Text(), nullable=True),
        sa.Column("why_choose", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("faqs", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "department_locations",
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("location_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("department_id", "location_id"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_department_locations_location_id", "department_locations", ["location_id"])

    # =======================================================================
    # 3. DOCTORS
    # =======================================================================
    op.create_table(
        "doctors",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("qualifications", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("experience", sa.Integer(), nullable=True, comment="Years of experience"),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("availability", sa.String(9), nullable=False, server_default="available", comment="available, busy, on_leave"),
        sa.Column("location_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_doctors_name", "doctors", ["name"])
    op.create_index("ix_doctors_location_id", "doctors", ["location_id"])

    op.create_table(
        "doctor_specializations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("specialization", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["doctor_id"], ["doctors.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_doctor_specializations_doctor_id", "doctor_specializations", ["doctor_id"])

    op.create_table(
        "doctor_departments",
        sa.Column("doctor_id", sa.Integer(), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("doctor_id", "department_id"),
        sa.ForeignKeyConstraint(["doctor_id"], ["doctors.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_doctor_departments_department_id", "doctor_departments", ["department_id"])

    # =======================================================================
    # 4. PACKAGES AND TESTS
    # =======================================================================
    op.create_table(
        "packages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("key_features", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("duration", sa.String(100), nullable=True),
        sa.Column("report_delivery", sa.String(100), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("age_range", sa.String(100), nullable=True, server_default="All ages"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "tests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("package_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("normal_range", sa.String(100), nullable=True),
        sa.Column("unit", sa.String(50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["package_id"], ["packages.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_tests_package_id", "tests", ["package_id"])

    # =======================================================================
    # 5. APPOINTMENTS
    # =======================================================================
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("mobile_number", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("location_id", sa.Integer(), nullable=True),
        sa.Column("department_id", sa.Integer(), nullable=True),
        sa.Column("doctor_id", sa.Integer(), nullable=True),
        sa.Column("package_id", sa.Integer(), nullable=True),
        sa.Column("reason_for_visit", sa.Text(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("preferred_date", sa.Date(), nullable=True),
        sa.Column("preferred_time", sa.String(50), nullable=True),
        sa.Column("status", sa.String(9), nullable=False, server_default="pending", comment="pending, confirmed, completed, cancelled"),
        sa.Column("type", sa.Integer(), nullable=False, server_default="1", comment="1 = normal appointment, 2 = package booking"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["doctor_id"], ["doctors.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["package_id"], ["packages.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_appointments_preferred_date", "appointments", ["preferred_date"])
    op.create_index("ix_appointments_status", "appointments", ["status"])

    # =======================================================================
    # 6. SITE CONTENT
    # =======================================================================
    op.create_table(
        "banners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image", sa.String(500), nullable=False),
        sa.Column("link", sa.String(500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_hero", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "contact_info",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contact_type", sa.String(6), nullable=False, comment="email, mobile"),
        sa.Column("contact_value", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )


# ===========================================================================
# downgrade
# ===========================================================================

def downgrade() -> None:
    """Drop everything in reverse dependency order."""
    op.drop_table("contact_info")
    op.drop_table("banners")

    op.drop_index("ix_appointments_status", table_name="appointments")
    op.drop_index("ix_appointments_preferred_date", table_name="appointments")
    op.drop_table("appointments")

    op.drop_index("ix_tests_package_id", table_name="tests")
    op.drop_table("tests")
    op.drop_table("packages")

    op.drop_index("ix_doctor_departments_department_id", table_name="doctor_departments")
    op.drop_table("doctor_departments")
    op.drop_index("ix_doctor_specializations_doctor_id", table_name="doctor_specializations")
    op.drop_table("doctor_specializations")
    op.drop_index("ix_doctors_location_id", table_name="doctors")
    op.drop_index("ix_doctors_name", table_name="doctors")
    op.drop_table("doctors")

    op.drop_index("ix_department_locations_location_id", table_name="department_locations")
    op.drop_table("department_locations")
    op.drop_table("departments")
    op.drop_table("locations")

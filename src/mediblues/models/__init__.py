"""Models package - SQLAlchemy ORM models."""
from .appointment import Appointment
from .associations import department_locations, doctor_departments
from .banner import Banner
from .contact import ContactInfo
from .department import Department
from .doctor import Doctor, DoctorSpecialization
from .enums import AppointmentStatus, AppointmentType, ContactType, DoctorAvailability
from .location import Location
from .package import Package, PackageTest

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "AppointmentType",
    "Banner",
    "ContactInfo",
    "ContactType",
    "Department",
    "Doctor",
    "DoctorAvailability",
    "DoctorSpecialization",
    "Location",
    "Package",
    "PackageTest",
    "department_locations",
    "doctor_departments",
]

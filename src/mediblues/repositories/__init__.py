"""Repositories package - Data access layer."""
from .appointment_repository import AppointmentRepository
from .banner_repository import BannerRepository
from .base import CrudRepository
from .contact_repository import ContactInfoRepository
from .department_repository import DepartmentRepository
from .doctor_repository import DoctorRepository
from .location_repository import LocationRepository
from .package_repository import PackageRepository
from .statistics_repository import StatisticsRepository

__all__ = [
    "AppointmentRepository",
    "BannerRepository",
    "ContactInfoRepository",
    "CrudRepository",
    "DepartmentRepository",
    "DoctorRepository",
    "LocationRepository",
    "PackageRepository",
    "StatisticsRepository",
]

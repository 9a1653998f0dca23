"""Enumerations shared by models, schemas and repositories."""
from enum import Enum, IntEnum


class DoctorAvailability(str, Enum):
    """Doctor availability. Allowed values: available, busy, on_leave."""
    AVAILABLE = "available"
    BUSY = "busy"
    ON_LEAVE = "on_leave"


class AppointmentStatus(str, Enum):
    """Appointment lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppointmentType(IntEnum):
    """Appointment kind: 1 = regular consultation, 2 = health-check package booking."""
    NORMAL = 1
    PACKAGE = 2


class ContactType(str, Enum):
    """Kind of published contact detail."""
    EMAIL = "email"
    MOBILE = "mobile"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in SQLEnum columns."""
    return [member.value for member in enum_cls]

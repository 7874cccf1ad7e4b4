from .appointment import AppointmentRepository
from .base import BaseRepository
from .doctor import DoctorProfileRepository
from .user import IdentityRepository

__all__ = [
    "AppointmentRepository",
    "BaseRepository",
    "DoctorProfileRepository",
    "IdentityRepository",
]

"""SQLAlchemy models registered on the shared metadata."""

from __future__ import annotations

from .appointment import Appointment
from .doctor import DoctorProfile
from .user import Identity, Role

__all__ = ["Appointment", "DoctorProfile", "Identity", "Role"]

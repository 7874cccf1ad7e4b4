"""Marshmallow schemas for request validation and response shaping."""

from __future__ import annotations

from .appointment import (
    AppointmentCreateSchema,
    AppointmentListFilterSchema,
    AppointmentSchema,
)
from .auth import (
    LoginSchema,
    RefreshResponseSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .doctor import DoctorCreateSchema, DoctorFilterSchema, DoctorPublicSchema, DoctorSchema
from .user import IdentitySchema, ProfileUpdateSchema

__all__ = [
    "RegisterSchema",
    "LoginSchema",
    "RefreshSchema",
    "TokenPairSchema",
    "RefreshResponseSchema",
    "IdentitySchema",
    "ProfileUpdateSchema",
    "DoctorCreateSchema",
    "DoctorFilterSchema",
    "DoctorPublicSchema",
    "DoctorSchema",
    "AppointmentCreateSchema",
    "AppointmentListFilterSchema",
    "AppointmentSchema",
]

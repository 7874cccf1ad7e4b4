"""Service layer public API.

Re-exports
----------
- :class:`BaseService`
- :class:`AuthService` and its DTOs
- :class:`IdentityService`, :class:`RegistrationService`
- :class:`DoctorService`, :class:`AppointmentService`
"""

from __future__ import annotations

from mediqueue.services._shared.base import BaseService
from mediqueue.services.appointments import (
    AppointmentOut,
    AppointmentService,
    BookAppointmentIn,
    CancelAppointmentIn,
)
from mediqueue.services.auth import (
    AuthService,
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RefreshOut,
    TokenPairOut,
)
from mediqueue.services.doctors import DoctorCreateIn, DoctorOut, DoctorService
from mediqueue.services.identity import (
    IdentityCreateIn,
    IdentityPublicOut,
    IdentityService,
    ProfileUpdateIn,
)
from mediqueue.services.registration import (
    PatientRegistrationIn,
    RegistrationOut,
    RegistrationService,
)

__all__ = [
    "BaseService",
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "RefreshOut",
    "TokenPairOut",
    "IdentityService",
    "IdentityCreateIn",
    "IdentityPublicOut",
    "ProfileUpdateIn",
    "DoctorService",
    "DoctorCreateIn",
    "DoctorOut",
    "AppointmentService",
    "AppointmentOut",
    "BookAppointmentIn",
    "CancelAppointmentIn",
    "RegistrationService",
    "PatientRegistrationIn",
    "RegistrationOut",
]

from __future__ import annotations

from dataclasses import dataclass

from mediqueue.models.doctor import DEFAULT_SPECIALITY, DoctorProfile


@dataclass(frozen=True, slots=True)
class DoctorCreateIn:
    """
    Input DTO for an admin creating a doctor.

    :param name: Display name.
    :param email: Login email.
    :param password: Raw password.
    :param speciality: Listed speciality.
    :param fee: Consultation fee in minor currency units.
    """

    name: str
    email: str
    password: str
    speciality: str = DEFAULT_SPECIALITY
    fee: int = 0


@dataclass(frozen=True, slots=True)
class DoctorOut:
    """Doctor projection; the public list drops ``email`` and ``is_active``."""

    id: int
    name: str
    email: str
    speciality: str
    fee: int
    available: bool
    is_active: bool
    role: str = "doctor"

    @classmethod
    def from_model(cls, profile: DoctorProfile) -> DoctorOut:
        identity = profile.identity
        return cls(
            id=profile.identity_id,
            name=identity.name,
            email=identity.email,
            speciality=profile.speciality,
            fee=profile.fee,
            available=profile.available,
            is_active=identity.is_active,
        )

"""
DoctorService
=============

Doctor-side catalogue: admin creation of doctors together with their
profile, the public listing, and the availability switch that gates new
bookings.
"""

from __future__ import annotations

import logging

from mediqueue.models.doctor import DoctorProfile
from mediqueue.models.user import Role
from mediqueue.services._shared.base import BaseService
from mediqueue.services._shared.errors import NotFoundError, ServiceError
from mediqueue.services.doctors.dto import DoctorCreateIn, DoctorOut
from mediqueue.services.identity.dto import IdentityCreateIn
from mediqueue.services.identity.service import create_identity
from mediqueue.uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def create_doctor(uow: SQLAlchemyUnitOfWork, dto: DoctorCreateIn) -> DoctorProfile:
    """
    Stage a doctor identity and its profile inside the caller's transaction.

    :raises ConflictError: When the email is already registered.
    :raises ServiceError: When the model rejects a field.
    """
    identity = create_identity(
        uow.identities,
        IdentityCreateIn(name=dto.name, email=dto.email, password=dto.password, role=Role.DOCTOR),
    )
    try:
        profile = DoctorProfile(identity=identity, speciality=dto.speciality, fee=dto.fee)
    except ValueError as exc:
        raise ServiceError(str(exc)) from exc
    uow.doctors.add(profile)
    return profile


class DoctorService(BaseService):
    """Application service for doctor profiles."""

    def create(self, dto: DoctorCreateIn) -> DoctorOut:
        with self.rw_uow() as uow:
            out = DoctorOut.from_model(create_doctor(uow, dto))
        log.info("doctor.created", extra={"doctor_id": out.id, "role": out.role})
        return out

    def list_public(self, *, speciality: str | None = None) -> list[DoctorOut]:
        """Active doctors ordered by name, available or not."""
        with self.rw_uow() as uow:
            rows = uow.doctors.list_with_identity(speciality=speciality)
            return [DoctorOut.from_model(p) for p in rows]

    def list_all(self) -> list[DoctorOut]:
        """Every doctor, deactivated ones included (admin view)."""
        with self.rw_uow() as uow:
            rows = uow.doctors.list_with_identity(active_only=False)
            return [DoctorOut.from_model(p) for p in rows]

    def toggle_availability(self, doctor_id: int) -> DoctorOut:
        """
        Flip whether a doctor accepts new bookings.

        Existing appointments are kept either way.

        :raises NotFoundError: If no doctor profile exists for ``doctor_id``.
        """
        with self.rw_uow() as uow:
            profile = uow.doctors.get_for_update(doctor_id)
            if profile is None:
                raise NotFoundError("Doctor", doctor_id)
            uow.doctors.update(profile, available=not profile.available)
            out = DoctorOut.from_model(profile)
        log.info(
            "doctor.availability_changed",
            extra={"doctor_id": out.id, "available": out.available},
        )
        return out

"""
AppointmentService
==================

Booking lifecycle for patients and the doctor-side schedule:

- ``book``: an available, active doctor and a free slot; the doctor's
  current fee is copied onto the appointment.
- ``cancel``: owner only, once; the slot becomes bookable again.
- ``list_for_patient`` / ``list_for_doctor``.

A slot is held by at most one live appointment. The service checks first
and the partial unique index on (``doctor_id``, ``starts_at``) settles
concurrent bookings.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from mediqueue.models.appointment import SLOT_INDEX, Appointment
from mediqueue.services._shared.base import BaseService
from mediqueue.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    violates,
)
from mediqueue.services.appointments.dto import (
    AppointmentOut,
    BookAppointmentIn,
    CancelAppointmentIn,
    as_utc,
)

log = logging.getLogger(__name__)


def _log_context(out: AppointmentOut) -> dict[str, int]:
    return {"appointment_id": out.id, "doctor_id": out.doctor_id, "identity_id": out.patient_id}


class AppointmentService(BaseService):
    """Application service for appointments."""

    def book(self, dto: BookAppointmentIn) -> AppointmentOut:
        """
        Book a doctor slot for the patient.

        :raises NotFoundError: Unknown or deactivated doctor.
        :raises ConflictError: The doctor is not taking bookings, or the slot
            is already held by a live appointment.
        """
        starts_at = as_utc(dto.starts_at)
        with self.rw_uow() as uow:
            profile = uow.doctors.get(dto.doctor_id)
            if profile is None or not profile.identity.is_active:
                raise NotFoundError("Doctor", dto.doctor_id)
            if not profile.available:
                raise ConflictError("Doctor", "not available for booking")
            if uow.appointments.slot_taken(dto.doctor_id, starts_at):
                raise ConflictError("Appointment", "slot already booked")

            appointment = Appointment(
                patient_id=dto.patient_id,
                doctor_id=dto.doctor_id,
                starts_at=starts_at,
                amount=profile.fee,
            )
            try:
                uow.appointments.add(appointment)
            except IntegrityError as exc:
                if violates(exc, SLOT_INDEX):
                    raise ConflictError("Appointment", "slot already booked") from exc
                raise
            out = AppointmentOut.from_model(appointment)
        log.info(
            "appointment.booked",
            extra=_log_context(out),
        )
        return out

    def cancel(self, dto: CancelAppointmentIn) -> AppointmentOut:
        """
        :raises NotFoundError: Unknown appointment.
        :raises AuthorizationError: The appointment belongs to another patient.
        :raises ServiceError: Already cancelled.
        """
        with self.rw_uow() as uow:
            appointment = uow.appointments.get_for_update(dto.appointment_id)
            if appointment is None:
                raise NotFoundError("Appointment", dto.appointment_id)
            if appointment.patient_id != dto.patient_id:
                raise AuthorizationError("Cannot cancel another patient's appointment")
            if appointment.cancelled:
                raise ServiceError("Appointment already cancelled")
            uow.appointments.update(appointment, cancelled=True, cancelled_at=self.now_utc())
            out = AppointmentOut.from_model(appointment)
        log.info(
            "appointment.cancelled",
            extra=_log_context(out),
        )
        return out

    def list_for_patient(self, patient_id: int) -> list[AppointmentOut]:
        with self.rw_uow() as uow:
            rows = uow.appointments.list_for_patient(patient_id)
            return [AppointmentOut.from_model(a) for a in rows]

    def list_for_doctor(
        self, doctor_id: int, *, include_cancelled: bool = False
    ) -> list[AppointmentOut]:
        with self.rw_uow() as uow:
            rows = uow.appointments.list_for_doctor(
                doctor_id, include_cancelled=include_cancelled
            )
            return [AppointmentOut.from_model(a) for a in rows]

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from mediqueue.models.appointment import Appointment


def as_utc(value: datetime) -> datetime:
    """Normalize to an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class BookAppointmentIn:
    """
    Input DTO for a patient booking a slot.

    :param patient_id: Authenticated patient.
    :param doctor_id: Doctor identity id.
    :param starts_at: Slot start; naive values are read as UTC.
    """

    patient_id: int
    doctor_id: int
    starts_at: datetime


@dataclass(frozen=True, slots=True)
class CancelAppointmentIn:
    patient_id: int
    appointment_id: int


@dataclass(frozen=True, slots=True)
class AppointmentOut:
    """Appointment projection shared by the patient and doctor views."""

    id: int
    patient_id: int
    patient_name: str
    doctor_id: int
    doctor_name: str
    starts_at: datetime
    amount: int
    cancelled: bool
    created_at: datetime

    @classmethod
    def from_model(cls, appointment: Appointment) -> AppointmentOut:
        return cls(
            id=appointment.id,
            patient_id=appointment.patient_id,
            patient_name=appointment.patient.name,
            doctor_id=appointment.doctor_id,
            doctor_name=appointment.doctor.name,
            starts_at=as_utc(appointment.starts_at),
            amount=appointment.amount,
            cancelled=appointment.cancelled,
            created_at=as_utc(appointment.created_at),
        )

"""Appointment repository: slot lookups and per-participant listings."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select

from mediqueue.models.appointment import Appointment
from mediqueue.repositories.base import BaseRepository, Columns


class AppointmentRepository(BaseRepository[Appointment]):
    """Persistence-only repository for :class:`Appointment`.

    A slot is the pair (``doctor_id``, ``starts_at``); only non-cancelled
    appointments occupy it.
    """

    model = Appointment

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self) -> Columns:
        return {
            "id": Appointment.id,
            "starts_at": Appointment.starts_at,
            "created_at": Appointment.created_at,
        }

    def _filterable_fields(self) -> Columns:
        return {
            "patient_id": Appointment.patient_id,
            "doctor_id": Appointment.doctor_id,
            "cancelled": Appointment.cancelled,
        }

    def _updatable_fields(self) -> set[str]:
        return {"cancelled", "cancelled_at"}

    # ---------------------------- Queries ----------------------------

    def slot_taken(self, doctor_id: int, starts_at: datetime) -> bool:
        stmt = select(Appointment.id).where(
            Appointment.doctor_id == doctor_id,
            Appointment.starts_at == starts_at,
            Appointment.cancelled.is_(False),
        )
        return bool(self.session.execute(stmt).first())

    def get_for_update(self, appointment_id: int) -> Appointment | None:
        """Load an appointment with a row lock (a no-op on SQLite)."""
        stmt = (
            select(Appointment)
            .where(Appointment.id == appointment_id)
            .with_for_update(of=Appointment)
        )
        return cast(Appointment | None, self.session.execute(stmt).scalars().first())

    def list_for_patient(self, patient_id: int) -> list[Appointment]:
        """Newest bookings first."""
        return self.list(filters={"patient_id": patient_id}, sort=["-created_at", "-id"])

    def list_for_doctor(
        self, doctor_id: int, *, include_cancelled: bool = False
    ) -> list[Appointment]:
        """Upcoming order: earliest slot first."""
        filters: dict[str, object] = {"doctor_id": doctor_id}
        if not include_cancelled:
            filters["cancelled"] = False
        return self.list(filters=filters, sort=["starts_at"])

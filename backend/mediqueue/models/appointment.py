"""Appointment model: one patient booking one doctor slot."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mediqueue.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import Identity

SLOT_INDEX = "uq_appointments_doctor_slot"


class Appointment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Booked consultation.

    A doctor slot (``doctor_id``, ``starts_at``) holds at most one live
    appointment; cancelling releases the slot. ``amount`` is the doctor's fee
    at booking time and does not follow later fee changes.
    """

    __tablename__ = "appointments"
    __repr_attrs__ = ("id", "doctor_id", "starts_at", "cancelled")

    patient_id: Mapped[int] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"), nullable=False
    )
    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"), nullable=False
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    cancelled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index(
            SLOT_INDEX,
            "doctor_id",
            "starts_at",
            unique=True,
            sqlite_where=text("NOT cancelled"),
            postgresql_where=text("NOT cancelled"),
        ),
        Index("ix_appointments_patient", "patient_id"),
    )

    patient: Mapped[Identity] = relationship("Identity", foreign_keys=[patient_id], lazy="joined")
    doctor: Mapped[Identity] = relationship("Identity", foreign_keys=[doctor_id], lazy="joined")

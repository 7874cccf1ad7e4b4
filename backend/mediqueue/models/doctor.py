"""Doctor profile: the bookable side of a doctor identity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from mediqueue.core.extensions import db

from .base import ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import Identity

DEFAULT_SPECIALITY = "General physician"


class DoctorProfile(ReprMixin, TimestampMixin, db.Model):
    """
    One-to-one extension of an :class:`~mediqueue.models.user.Identity`
    holding the doctor role.

    Fields
    ------
    identity_id : int
        Primary key and foreign key to ``identities.id``.
    speciality : str
        Shown in the public doctor list.
    fee : int
        Consultation fee in minor currency units; copied onto each booking.
    available : bool
        Only available doctors accept new appointments.
    """

    __tablename__ = "doctor_profiles"
    __repr_attrs__ = ("identity_id", "speciality", "available")

    identity_id: Mapped[int] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"), primary_key=True
    )
    speciality: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_SPECIALITY
    )
    fee: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (CheckConstraint("fee >= 0", name="ck_doctor_profiles_fee_non_negative"),)

    identity: Mapped[Identity] = relationship("Identity", lazy="joined")

    @validates("speciality")
    def _normalize_speciality(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Speciality is required.")
        return value.strip()

    @validates("fee")
    def _check_fee(self, key: str, value: int) -> int:
        if value < 0:
            raise ValueError("Fee cannot be negative.")
        return value

"""Doctor profile repository."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute

from mediqueue.models.doctor import DoctorProfile
from mediqueue.models.user import Identity
from mediqueue.repositories.base import BaseRepository, Columns, apply_sorting


class DoctorProfileRepository(BaseRepository[DoctorProfile]):
    """Persistence-only repository for :class:`DoctorProfile`, keyed by identity id."""

    model = DoctorProfile

    # ---------------------------- Whitelists ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        return DoctorProfile.identity_id

    def _sortable_fields(self) -> Columns:
        return {
            "name": Identity.name,
            "speciality": DoctorProfile.speciality,
            "fee": DoctorProfile.fee,
        }

    def _updatable_fields(self) -> set[str]:
        return {"speciality", "fee", "available"}

    # ---------------------------- Queries ----------------------------

    def get_for_update(self, identity_id: int) -> DoctorProfile | None:
        """Load a profile with a row lock (a no-op on SQLite)."""
        stmt = select(DoctorProfile).where(DoctorProfile.identity_id == identity_id)
        stmt = stmt.with_for_update(of=DoctorProfile)
        return cast(DoctorProfile | None, self.session.execute(stmt).scalars().first())

    def list_with_identity(
        self,
        *,
        active_only: bool = True,
        available: bool | None = None,
        speciality: str | None = None,
        sort: list[str] | None = None,
    ) -> list[DoctorProfile]:
        """Profiles joined to their identity; inactive identities are hidden by default."""
        stmt = select(DoctorProfile).join(Identity, DoctorProfile.identity_id == Identity.id)
        if active_only:
            stmt = stmt.where(Identity.is_active.is_(True))
        if available is not None:
            stmt = stmt.where(DoctorProfile.available.is_(available))
        if speciality:
            stmt = stmt.where(DoctorProfile.speciality == speciality)
        stmt = apply_sorting(
            stmt, self._sortable_fields(), sort or ["name"], pk_attr=self._pk_attr()
        )
        return list(self.session.execute(stmt).scalars().unique().all())

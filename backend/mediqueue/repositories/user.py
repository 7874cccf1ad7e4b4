"""Identity repository: lookups plus atomic session-field updates."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select, update

from mediqueue.models.user import Identity
from mediqueue.repositories.base import BaseRepository


class IdentityRepository(BaseRepository[Identity]):
    """Persistence-only repository for :class:`Identity`.

    The session fields (``refresh_token_digest`` and ``session_issued_at``)
    are only ever written through single ``UPDATE`` statements so concurrent
    login, refresh and logout calls never interleave a read-modify-write.
    """

    model = Identity

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": Identity.id,
            "name": Identity.name,
            "email": Identity.email,
            "created_at": Identity.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": Identity.email,
            "role": Identity.role,
            "is_active": Identity.is_active,
        }

    def _updatable_fields(self):
        """Profile fields only; role and session fields are never updatable here."""
        return {"name", "phone", "is_active"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> Identity | None:
        """Fetch an identity by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Identity or ``None`` when not found.
        :rtype: Identity | None
        """
        stmt = select(Identity).where(Identity.email == email.lower().strip())
        return cast(Identity | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(Identity.id).where(Identity.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Session field ----------------------------

    def get_session_digest(self, identity_id: int) -> str | None:
        """Read the stored digest straight from the database, bypassing the identity map."""
        stmt = select(Identity.refresh_token_digest).where(Identity.id == identity_id)
        return cast(str | None, self.session.execute(stmt).scalar_one_or_none())

    def set_session(self, identity_id: int, digest: str, issued_at: datetime) -> bool:
        """Overwrite the live session unconditionally.

        :returns: ``True`` when the identity exists.
        """
        stmt = (
            update(Identity)
            .where(Identity.id == identity_id)
            .values(refresh_token_digest=digest, session_issued_at=issued_at)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def clear_session(self, identity_id: int) -> bool:
        """Clear the live session.

        :returns: ``True`` when a live session was cleared.
        """
        stmt = (
            update(Identity)
            .where(Identity.id == identity_id, Identity.refresh_token_digest.is_not(None))
            .values(refresh_token_digest=None, session_issued_at=None)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def swap_session(
        self,
        identity_id: int,
        expected_digest: str,
        new_digest: str,
        issued_at: datetime,
    ) -> bool:
        """Compare-and-swap the live session.

        Only replaces the digest when it still equals ``expected_digest``; of
        two concurrent rotations presenting the same token exactly one wins.

        :returns: ``True`` when the swap happened.
        """
        stmt = (
            update(Identity)
            .where(
                Identity.id == identity_id,
                Identity.refresh_token_digest == expected_digest,
            )
            .values(refresh_token_digest=new_digest, session_issued_at=issued_at)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

"""Refresh token store backed by the identity row's session fields."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from mediqueue.repositories.user import IdentityRepository
from mediqueue.services._shared.ports.refresh_token_store import RefreshTokenStore, digest_token


class SQLRefreshTokenStore(RefreshTokenStore):
    """
    Keep the live refresh token as a SHA-256 digest on ``identities``.

    The store never commits: callers run it inside a Unit of Work sharing the
    same session. ``rotate`` is a single conditional ``UPDATE`` so only one
    of several concurrent rotations presenting the same token succeeds.
    """

    def __init__(self, session: Session | None = None) -> None:
        self.repo = IdentityRepository(session=session)

    def supersede(self, identity_id: int, token: str, issued_at: datetime) -> None:
        self.repo.set_session(identity_id, digest_token(token), issued_at)

    def matches(self, identity_id: int, token: str) -> bool:
        stored = self.repo.get_session_digest(identity_id)
        return stored is not None and stored == digest_token(token)

    def revoke(self, identity_id: int) -> bool:
        return self.repo.clear_session(identity_id)

    def rotate(
        self,
        identity_id: int,
        presented: str,
        new_token: str,
        issued_at: datetime,
    ) -> bool:
        return self.repo.swap_session(
            identity_id, digest_token(presented), digest_token(new_token), issued_at
        )

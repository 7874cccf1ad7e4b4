from __future__ import annotations

import hashlib
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


def digest_token(token: str) -> str:
    """Return the hex SHA-256 digest stored in place of a raw refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RefreshTokenStore(Protocol):
    """
    Single-slot store of the live refresh token per identity.

    Each identity holds at most one live refresh token. Writes are atomic per
    identity: ``supersede`` and ``revoke`` overwrite unconditionally, while
    ``rotate`` only succeeds when the presented token is still the live one.
    """

    def supersede(self, identity_id: int, token: str, issued_at: datetime) -> None:
        """Make ``token`` the live refresh token, invalidating any previous one."""

    def matches(self, identity_id: int, token: str) -> bool:
        """Return ``True`` when ``token`` is the live refresh token."""

    def revoke(self, identity_id: int) -> bool:
        """
        Clear the live refresh token.

        :returns: True if a live token existed.
        """

    def rotate(
        self,
        identity_id: int,
        presented: str,
        new_token: str,
        issued_at: datetime,
    ) -> bool:
        """
        Atomically replace ``presented`` with ``new_token``.

        :returns: False when ``presented`` is no longer the live token.
        """


@dataclass(frozen=True)
class _Slot:
    digest: str
    issued_at: datetime


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory single-slot store.

    .. note::
       Every read and write goes through one lock, so ``rotate`` is atomic
       and readers never see a half-applied swap.
    """

    def __init__(self) -> None:
        self._slots: dict[int, _Slot] = {}
        self._lock = threading.Lock()

    def supersede(self, identity_id: int, token: str, issued_at: datetime) -> None:
        with self._lock:
            self._slots[identity_id] = _Slot(digest_token(token), issued_at)

    def matches(self, identity_id: int, token: str) -> bool:
        with self._lock:
            slot = self._slots.get(identity_id)
            return slot is not None and slot.digest == digest_token(token)

    def revoke(self, identity_id: int) -> bool:
        with self._lock:
            return self._slots.pop(identity_id, None) is not None

    def rotate(
        self,
        identity_id: int,
        presented: str,
        new_token: str,
        issued_at: datetime,
    ) -> bool:
        with self._lock:
            slot = self._slots.get(identity_id)
            if slot is None or slot.digest != digest_token(presented):
                return False
            self._slots[identity_id] = _Slot(digest_token(new_token), issued_at)
            return True

    def issued_at(self, identity_id: int) -> datetime | None:
        with self._lock:
            slot = self._slots.get(identity_id)
        return slot.issued_at if slot else None

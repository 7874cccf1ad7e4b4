"""Client-side token storage."""

from __future__ import annotations

import threading
from collections.abc import MutableMapping

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"


class TokenSession:
    """Access/refresh tokens held by one client.

    Tokens live in ``storage`` under the ``accessToken`` / ``refreshToken``
    keys, so a persistent mapping (a shelf, a keyring adapter) can back the
    session across restarts. The two keys are always cleared together.
    """

    def __init__(self, storage: MutableMapping[str, str] | None = None) -> None:
        self._storage: MutableMapping[str, str] = storage if storage is not None else {}
        self._lock = threading.Lock()

    @property
    def access_token(self) -> str | None:
        return self._storage.get(ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> str | None:
        return self._storage.get(REFRESH_TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        """Store a new access token and, when given, a new refresh token.

        A ``None`` refresh token keeps the current one (refresh without rotation).
        """
        with self._lock:
            self._storage[ACCESS_TOKEN_KEY] = access_token
            if refresh_token is not None:
                self._storage[REFRESH_TOKEN_KEY] = refresh_token

    def clear(self) -> bool:
        """Drop both tokens; ``True`` when at least one was held."""
        with self._lock:
            access = self._storage.pop(ACCESS_TOKEN_KEY, None)
            refresh = self._storage.pop(REFRESH_TOKEN_KEY, None)
        return access is not None or refresh is not None

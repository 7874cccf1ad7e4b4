"""
mediqueue.services._shared.ports
================================

Hexagonal ports the auth service depends on.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, the abstraction for issuing tokens and
    verifying refresh tokens.
- :mod:`refresh_token_store`:
    :class:`~.RefreshTokenStore`, the single-slot live refresh token store.

Concrete adapters live under ``mediqueue.infra``; the in-memory doubles here
back the unit tests.
"""

from __future__ import annotations

from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore, digest_token
from .token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    StubTokenProvider,
    TokenProvider,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "TokenProvider",
    "StubTokenProvider",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
    "digest_token",
]

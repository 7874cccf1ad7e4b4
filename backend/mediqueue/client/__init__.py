"""Python client for the MediQueue API with transparent token refresh."""

from __future__ import annotations

from .errors import (
    ClientError,
    MissingRefreshTokenError,
    RefreshFailedError,
    SessionExpiredError,
    TransportError,
)
from .http import ApiClient
from .refresh import RefreshCoordinator
from .session import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, TokenSession

__all__ = [
    "ApiClient",
    "TokenSession",
    "RefreshCoordinator",
    "ClientError",
    "SessionExpiredError",
    "RefreshFailedError",
    "MissingRefreshTokenError",
    "TransportError",
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
]

"""Client-side error taxonomy."""

from __future__ import annotations


class ClientError(Exception):
    """Base class for errors raised by :mod:`mediqueue.client`."""


class SessionExpiredError(ClientError):
    """The session cannot be recovered; the user has to sign in again.

    Raised after the stored tokens were cleared.
    """


class RefreshFailedError(ClientError):
    """The refresh exchange was rejected or returned an unusable body.

    :ivar status_code: HTTP status of the refresh response, if one arrived.
    :cvar reason: Short tag logged when the failure ends the session.
    """

    reason = "refresh_failed"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(RefreshFailedError):
    """The refresh exchange timed out or could not reach the server."""

    reason = "refresh_unreachable"


class MissingRefreshTokenError(RefreshFailedError):
    """No refresh token was held when an exchange was needed."""

    reason = "missing_refresh_token"

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from mediqueue.services._shared.errors import AuthenticationError

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenProvider(Protocol):
    """Port for issuing access/refresh tokens and verifying refresh tokens.

    Access tokens are verified at the HTTP edge, so the port only decodes
    refresh tokens. ``decode_refresh_token`` raises
    :class:`~mediqueue.services._shared.errors.AuthenticationError` for any
    bad signature, expiry, malformed payload or wrong token type.
    """

    def create_access_token(
        self,
        *,
        identity: int | str,
        role: str,
        expires_delta: timedelta,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        expires_delta: timedelta,
    ) -> str: ...

    def decode_refresh_token(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Expiry is evaluated against the wall clock at decode time, so frozen-time
    tests can move past ``exp``.
    """

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(self, *, identity: int | str, ttype: str, exp_delta: timedelta, **claims: Any) -> str:
        self._seq += 1
        now = datetime.now(tz=UTC)
        token = f"{ttype}.{identity}.{self._seq}"
        payload: dict[str, Any] = {
            "sub": str(identity),
            "type": ttype,
            "iat": int(now.timestamp()),
            "exp": int((now + exp_delta).timestamp()),
            **claims,
        }
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: int | str,
        role: str,
        expires_delta: timedelta,
    ) -> str:
        return self._mk(identity=identity, ttype=ACCESS_TOKEN_TYPE, exp_delta=expires_delta, role=role)

    def create_refresh_token(self, *, identity: int | str, expires_delta: timedelta) -> str:
        return self._mk(identity=identity, ttype=REFRESH_TOKEN_TYPE, exp_delta=expires_delta)

    def decode(self, token: str) -> dict[str, Any]:
        return self._issued[token]

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None:
            raise AuthenticationError("Invalid refresh token")
        if payload["type"] != REFRESH_TOKEN_TYPE:
            raise AuthenticationError("Wrong token type: refresh token required.")
        if payload["exp"] <= int(datetime.now(tz=UTC).timestamp()):
            raise AuthenticationError("Refresh token has expired")
        return payload

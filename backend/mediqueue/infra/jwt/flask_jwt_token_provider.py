from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt as pyjwt
from flask import current_app

from mediqueue.services._shared.errors import AuthenticationError
from mediqueue.services._shared.ports import REFRESH_TOKEN_TYPE, TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter issuing access tokens through Flask-JWT-Extended and refresh
    tokens through PyJWT.

    Refresh tokens are signed with ``JWT_REFRESH_SECRET_KEY`` so they never
    verify as access tokens (and vice versa). Every refresh token carries a
    random ``jti`` so two tokens issued in the same second still differ.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def _refresh_key(self) -> str:
        key = current_app.config.get("JWT_REFRESH_SECRET_KEY")
        if not key:
            raise RuntimeError("JWT_REFRESH_SECRET_KEY is not configured.")
        return cast(str, key)

    def _algorithm(self) -> str:
        return cast(str, current_app.config.get("JWT_ALGORITHM", "HS256"))

    def create_access_token(
        self,
        *,
        identity: int | str,
        role: str,
        expires_delta: timedelta,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        return cast(
            str,
            _create_access(
                identity=str(identity),
                additional_claims={"role": role},
                expires_delta=expires_delta,
            ),
        )

    def create_refresh_token(self, *, identity: int | str, expires_delta: timedelta) -> str:
        now = datetime.now(tz=UTC)
        payload = {
            "sub": str(identity),
            "iat": now,
            "exp": now + expires_delta,
            "jti": uuid4().hex,
            "type": REFRESH_TOKEN_TYPE,
        }
        return pyjwt.encode(payload, self._refresh_key(), algorithm=self._algorithm())

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        try:
            claims = pyjwt.decode(
                token,
                self._refresh_key(),
                algorithms=[self._algorithm()],
                options={"require": ["sub", "exp", "type"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Refresh token has expired") from exc
        except pyjwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid refresh token") from exc

        if claims.get("type") != REFRESH_TOKEN_TYPE:
            raise AuthenticationError("Wrong token type: refresh token required.")
        return cast(dict[str, Any], claims)

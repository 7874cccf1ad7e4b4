from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: Identity email (normalized by the repository lookup).
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT, exactly as presented; anything
        other than a non-empty string is rejected.
    :type refresh_token: object
    """

    refresh_token: object


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param identity_id: Identity taken from the verified access token.
    :type identity_id: int
    """

    identity_id: int


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """
    Output DTO of a refresh exchange.

    ``refresh_token`` is only set when rotation is enabled.
    """

    access_token: str
    refresh_token: str | None = None


# ------------------------------ Config DTO -------------------------------- #

DEFAULT_ACCESS_EXPIRES = timedelta(minutes=15)
DEFAULT_REFRESH_EXPIRES = timedelta(days=7)


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param rotate: Issue a new refresh token on every refresh exchange.
    :type rotate: bool
    """

    access_expires: timedelta = DEFAULT_ACCESS_EXPIRES
    refresh_expires: timedelta = DEFAULT_REFRESH_EXPIRES
    rotate: bool = False

    @classmethod
    def from_mapping(cls, config) -> AuthTokenConfig:
        """Build from a Flask config mapping (``JWT_*`` keys)."""
        return cls(
            access_expires=config.get("JWT_ACCESS_TOKEN_EXPIRES", DEFAULT_ACCESS_EXPIRES),
            refresh_expires=config.get("JWT_REFRESH_TOKEN_EXPIRES", DEFAULT_REFRESH_EXPIRES),
            rotate=bool(config.get("JWT_REFRESH_ROTATION", False)),
        )

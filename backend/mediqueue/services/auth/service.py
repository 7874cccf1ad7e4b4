from __future__ import annotations

import logging
from typing import Any

from mediqueue.models.user import Identity
from mediqueue.services._shared.base import BaseService
from mediqueue.services._shared.errors import AuthenticationError, TokenRevokedError
from mediqueue.services._shared.ports.refresh_token_store import RefreshTokenStore
from mediqueue.services._shared.ports.token_provider import TokenProvider
from mediqueue.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RefreshOut,
    TokenPairOut,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Session lifecycle service (login / refresh / logout).

    Each identity holds a single live refresh session in the
    :class:`RefreshTokenStore`. Issuing a pair supersedes any prior session,
    logout clears it, and a refresh exchange succeeds only while the
    presented token is still the live one.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        refresh_store: RefreshTokenStore,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter for issuing/decoding JWTs.
        :param refresh_store: Single-slot store for the live refresh token.
        :param token_cfg: Lifetimes and rotation policy.
        """
        self.tokens = token_provider
        self.refresh_store = refresh_store
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue_tokens(self, identity: Identity) -> TokenPairOut:
        """
        Issue an access/refresh pair and make the refresh token the live one.

        Must run inside the caller's Unit of Work so the store write commits
        with it.

        :param identity: Already authenticated identity.
        :returns: Token pair.
        """
        access = self.tokens.create_access_token(
            identity=identity.id,
            role=identity.role.value,
            expires_delta=self.cfg.access_expires,
        )
        refresh = self.tokens.create_refresh_token(
            identity=identity.id,
            expires_delta=self.cfg.refresh_expires,
        )
        self.refresh_store.supersede(identity.id, refresh, self.now_utc())
        log.info(
            "auth.tokens.issued",
            extra={"identity_id": identity.id, "role": identity.role.value},
        )
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises AuthenticationError: On unknown email, wrong password or an
            inactive identity. The message does not reveal which.
        """
        with self.rw_uow() as uow:
            identity = uow.identities.get_by_email(dto.email)
            if identity is None or not identity.verify_password(dto.password):
                log.info("auth.login.rejected", extra={"reason": "invalid_credentials"})
                raise AuthenticationError("Invalid credentials")
            if not identity.is_active:
                log.info(
                    "auth.login.rejected",
                    extra={"reason": "inactive", "identity_id": identity.id},
                )
                raise AuthenticationError("Invalid credentials")
            return self.issue_tokens(identity)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> RefreshOut:
        """
        Exchange a live refresh token for a new access token.

        With rotation enabled the refresh token is swapped atomically and the
        new one is returned as well; the presented token then stops working.

        :raises AuthenticationError: Missing, malformed, expired token, or an
            identity that no longer exists or is inactive.
        :raises TokenRevokedError: The token is not the live one (logged out,
            superseded by a newer login, or already rotated).
        """
        presented = dto.refresh_token
        if not presented:
            raise AuthenticationError("Refresh token is required")
        if not isinstance(presented, str):
            raise AuthenticationError("Invalid refresh token")

        claims = self.tokens.decode_refresh_token(presented)
        identity_id = self._coerce_identity_id(claims)

        with self.rw_uow() as uow:
            identity = uow.identities.get(identity_id)
            if identity is None or not identity.is_active:
                log.info(
                    "auth.refresh.rejected",
                    extra={"reason": "unknown_identity", "identity_id": identity_id},
                )
                raise AuthenticationError("Invalid refresh token")

            new_refresh: str | None = None
            if self.cfg.rotate:
                new_refresh = self.tokens.create_refresh_token(
                    identity=identity.id,
                    expires_delta=self.cfg.refresh_expires,
                )
                live = self.refresh_store.rotate(
                    identity.id, presented, new_refresh, self.now_utc()
                )
            else:
                live = self.refresh_store.matches(identity.id, presented)

            if not live:
                log.info(
                    "auth.refresh.rejected",
                    extra={"reason": "token_revoked", "identity_id": identity.id},
                )
                raise TokenRevokedError()

            access = self.tokens.create_access_token(
                identity=identity.id,
                role=identity.role.value,
                expires_delta=self.cfg.access_expires,
            )
            log.info(
                "auth.refresh.succeeded",
                extra={"identity_id": identity.id, "rotated": new_refresh is not None},
            )
            return RefreshOut(access_token=access, refresh_token=new_refresh)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> bool:
        """
        Clear the identity's live refresh session. Idempotent.

        Outstanding access tokens stay valid until they expire.

        :returns: ``True`` if a live session was cleared.
        """
        with self.rw_uow():
            cleared = self.refresh_store.revoke(dto.identity_id)
        log.info(
            "auth.logout",
            extra={"identity_id": dto.identity_id, "reason": None if cleared else "no_session"},
        )
        return cleared

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce_identity_id(claims: dict[str, Any]) -> int:
        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid refresh token") from exc

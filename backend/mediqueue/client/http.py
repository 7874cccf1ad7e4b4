"""HTTP client that keeps a session alive across access-token expiry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NoReturn

import requests

from mediqueue.client.errors import (
    MissingRefreshTokenError,
    RefreshFailedError,
    SessionExpiredError,
    TransportError,
)
from mediqueue.client.refresh import RefreshCoordinator
from mediqueue.client.session import TokenSession

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_REFRESH_TIMEOUT = 10.0


class ApiClient:
    """JSON API client with bearer authentication and transparent refresh.

    Every request carries the cached access token. On a ``401`` the client
    exchanges the refresh token once (concurrent failures share that single
    exchange) and re-issues the request exactly once. A request whose token
    was already replaced by another caller's exchange is re-issued with the
    current token instead. A retried request that is still rejected is
    returned as is. When no refresh token is held, or the exchange fails, the
    session is cleared and :class:`SessionExpiredError` is raised.

    Parameters
    ----------
    base_url:
        API root, e.g. ``"https://api.example.com/api/v1"``.
    tokens:
        Token storage; a fresh in-memory session when omitted.
    http:
        Underlying :class:`requests.Session` (adapters, retries, mocks).
    refresh_path:
        Path of the refresh endpoint relative to ``base_url``.
    refresh_timeout:
        Timeout in seconds for the refresh exchange.
    on_session_expired:
        Called once per terminal failure, by the caller that cleared the
        tokens. Not called when no tokens were held.
    """

    def __init__(
        self,
        base_url: str,
        *,
        tokens: TokenSession | None = None,
        http: requests.Session | None = None,
        refresh_path: str = "/auth/refresh",
        login_path: str = "/auth/login",
        logout_path: str = "/auth/logout",
        timeout: float = DEFAULT_TIMEOUT,
        refresh_timeout: float = DEFAULT_REFRESH_TIMEOUT,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.tokens = tokens if tokens is not None else TokenSession()
        self.http = http if http is not None else requests.Session()
        self.refresh_path = refresh_path
        self.login_path = login_path
        self.logout_path = logout_path
        self.timeout = timeout
        self.refresh_timeout = refresh_timeout
        self.on_session_expired = on_session_expired
        self.coordinator: RefreshCoordinator[str] = RefreshCoordinator()

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #

    def login(self, email: str, password: str) -> requests.Response:
        """Authenticate and store the issued pair on success.

        Login failures are returned to the caller; they never trigger a refresh.
        """
        resp = self.http.post(
            self._url(self.login_path),
            json={"email": email, "password": password},
            timeout=self.timeout,
        )
        if resp.status_code == 200:
            body = resp.json()
            self.tokens.set_tokens(body["accessToken"], body["refreshToken"])
        return resp

    def logout(self) -> requests.Response | None:
        """Revoke the server-side session (best effort) and clear local tokens."""
        try:
            if self.tokens.access_token is None:
                return None
            return self._send("POST", self.logout_path, self.tokens.access_token)
        finally:
            self.tokens.clear()

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Send a request, recovering once from an expired access token.

        :raises SessionExpiredError: When the session cannot be refreshed.
        """
        sent_token = self.tokens.access_token
        resp = self._send(method, path, sent_token, **kwargs)
        if resp.status_code != 401:
            return resp

        try:
            access = self.coordinator.run(
                self._exchange, reuse=lambda: self._newer_access_token(sent_token)
            )
        except RefreshFailedError as exc:
            self._expire(exc.reason, exc)

        return self._send(method, path, access, **kwargs)

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> requests.Response:
        return self.request("DELETE", path, **kwargs)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(
        self, method: str, path: str, access_token: str | None, **kwargs: Any
    ) -> requests.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        kwargs.setdefault("timeout", self.timeout)
        return self.http.request(method, self._url(path), headers=headers, **kwargs)

    def _exchange(self) -> str:
        """Trade the stored refresh token for a new access token."""
        refresh_token = self.tokens.refresh_token
        if not refresh_token:
            raise MissingRefreshTokenError("No refresh token available")

        log.info("client.refresh.started")
        try:
            resp = self.http.post(
                self._url(self.refresh_path),
                json={"refreshToken": refresh_token},
                timeout=self.refresh_timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Refresh request failed: {exc}") from exc

        if resp.status_code != 200:
            raise RefreshFailedError(
                f"Refresh rejected with status {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            body = resp.json()
            access = body["accessToken"]
        except (ValueError, KeyError, TypeError) as exc:
            raise RefreshFailedError("Malformed refresh response", status_code=200) from exc

        self.tokens.set_tokens(access, body.get("refreshToken"))
        log.info("client.refresh.succeeded", extra={"rotated": "refreshToken" in body})
        return access

    def _newer_access_token(self, sent_token: str | None) -> str | None:
        current = self.tokens.access_token
        if current is not None and current != sent_token:
            return current
        return None

    def _expire(self, reason: str, cause: Exception | None = None) -> NoReturn:
        # Callers sharing one failed exchange all land here; only the one that
        # actually dropped the tokens reports the expiry.
        if self.tokens.clear():
            log.warning("client.session.expired", extra={"reason": reason})
            if self.on_session_expired is not None:
                self.on_session_expired()
        raise SessionExpiredError("Session expired; please sign in again.") from cause

"""Shared API helpers: authentication guards, service wiring and responses."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from mediqueue.core.errors import Forbidden, Unauthorized
from mediqueue.infra.jwt import JWTTokenProvider
from mediqueue.infra.sql import SQLRefreshTokenStore
from mediqueue.models.user import Role
from mediqueue.services.auth import AuthService, AuthTokenConfig

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Principal:
    """Verified caller of the current request."""

    id: int
    role: Role


def _load_principal() -> Principal:
    """Verify the bearer access token and attach the principal to ``g``.

    Missing, malformed, expired or wrongly-typed tokens are answered by the
    flask-jwt-extended error loaders (401).
    """
    verify_jwt_in_request(optional=False)
    claims = get_jwt() or {}
    try:
        principal = Principal(id=int(claims["sub"]), role=Role(claims["role"]))
    except (KeyError, TypeError, ValueError) as exc:
        log.warning("auth.verify.rejected", extra={"reason": "bad_claims"})
        raise Unauthorized("Invalid token") from exc
    g.principal = principal
    return principal


def current_principal() -> Principal:
    """Return the principal attached by :func:`require_auth` / :func:`require_role`."""
    principal = g.get("principal")
    if principal is None:
        raise RuntimeError("No authenticated principal on this request.")
    return cast(Principal, principal)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token (any role)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        _load_principal()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(*roles: Role) -> Callable[[F], F]:
    """Ensure the verified access token carries one of ``roles`` (403 otherwise)."""

    allowed = frozenset(roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            principal = _load_principal()
            if principal.role not in allowed:
                log.warning(
                    "auth.verify.forbidden",
                    extra={"identity_id": principal.id, "role": principal.role.value},
                )
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def build_auth_service() -> AuthService:
    """Wire :class:`AuthService` with the JWT provider and the SQL refresh store."""
    return AuthService(
        token_provider=JWTTokenProvider(),
        refresh_store=SQLRefreshTokenStore(),
        token_cfg=AuthTokenConfig.from_mapping(current_app.config),
    )


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]

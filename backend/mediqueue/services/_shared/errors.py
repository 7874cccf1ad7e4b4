"""
Domain-level exceptions used within the service layer.

These exceptions are framework-agnostic: services, repositories and stores
raise them without knowing about HTTP. ``translate_service_error`` is the one
place that maps them to API errors (RFC 7807); it imports the HTTP layer
lazily.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

if TYPE_CHECKING:
    from mediqueue.core.errors import APIError


SQLITE_UNIQUE_COLUMNS: dict[str, str] = {
    "uq_identities_email": "identities.email",
    "uq_appointments_doctor_slot": "appointments.doctor_id, appointments.starts_at",
}


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Name of the database constraint to match (e.g. ``uq_identities_email``).

    Returns
    -------
    bool
        True if the error message mentions the constraint. SQLite reports the
        columns instead of the constraint name, so the column list registered
        in ``SQLITE_UNIQUE_COLUMNS`` is accepted as well.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    columns = SQLITE_UNIQUE_COLUMNS.get(constraint_name)
    return columns is not None and columns in message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Anything not mapped explicitly translates to ``400 bad_request``.
    """


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Identity").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Identity").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Raised when credentials or a token cannot establish who the caller is."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class TokenRevokedError(AuthenticationError):
    """Raised when a well-formed refresh token is no longer the live one."""

    def __init__(self, message: str = "Refresh token has been revoked") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when an authenticated caller lacks the required role."""

    def __init__(self, message: str = "Insufficient role") -> None:
        super().__init__(message)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-level error to its API-level (HTTP) counterpart.

    :param exc: Exception raised within the service layer.
    :type exc: ServiceError
    :returns: API error ready to be raised or rendered.
    :rtype: mediqueue.core.errors.APIError
    """
    from mediqueue.core import errors as api_errors

    if isinstance(exc, TokenRevokedError):
        return api_errors.TokenRevoked(str(exc))
    if isinstance(exc, AuthenticationError):
        return api_errors.Unauthorized(str(exc))
    if isinstance(exc, AuthorizationError):
        return api_errors.Forbidden(str(exc))
    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return api_errors.Conflict(str(exc))
    return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

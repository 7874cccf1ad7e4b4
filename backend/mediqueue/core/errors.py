"""RFC 7807 (``application/problem+json``) error responses.

Every failure leaving the API, whether raised by a view, a service, the
validation layer, the database or the JWT verifier, is rendered by
:func:`problem` so clients see one shape::

    {"type", "title", "status", "detail", "instance", "code", "request_id", ["details"]}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from mediqueue.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Stable machine codes for bare HTTP statuses.
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    429: "too_many_requests",
    500: "internal_server_error",
    503: "service_unavailable",
}


def problem(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    """Render a problem document as a ``(response, status)`` pair.

    :param status: HTTP status code.
    :param code: Stable, machine-readable error code.
    :param message: Client-safe summary.
    :param details: Optional structured payload (validation messages...).
    """
    status = int(status)
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    response = jsonify(body)
    response.mimetype = PROBLEM_MIMETYPE
    return response, status


class APIError(Exception):
    """
    Error carrying its own HTTP rendering.

    Parameters
    ----------
    message : str
        Client-safe description.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Structured payload included as ``details``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_response(self) -> tuple[Response, int]:
        return problem(self.status_code, self.code, self.message, self.details or None)


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class Unauthorized(APIError):
    """401: the caller is not (or no longer) authenticated."""

    def __init__(self, message: str = "Unauthorized", code: str = "unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code=code)


class TokenRevoked(Unauthorized):
    """401: the refresh token verifies but is not the identity's live session."""

    def __init__(self, message: str = "Refresh token has been revoked") -> None:
        super().__init__(message, code="token_revoked")


class Forbidden(APIError):
    """403: authenticated, but the role does not grant access."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


def _register_jwt_loaders() -> None:
    """Answer flask-jwt-extended verification failures with 401 problems."""
    from mediqueue.core.extensions import jwt

    def _reject(reason: str, code: str, message: str) -> tuple[Response, int]:
        log.warning("auth.verify.rejected", extra={"reason": reason})
        return problem(HTTPStatus.UNAUTHORIZED, code, message)

    @jwt.unauthorized_loader
    def _missing(message: str):
        return _reject("missing_token", "unauthorized", message)

    @jwt.invalid_token_loader
    def _invalid(_message: str):
        return _reject("invalid_token", "unauthorized", "Invalid token")

    @jwt.expired_token_loader
    def _expired(_header: dict[str, Any], _payload: dict[str, Any]):
        return _reject("token_expired", "token_expired", "Token has expired")


def init_app(app: Flask) -> None:
    """Install problem+json handlers on ``app``.

    4xx outcomes are logged as warnings; 5xx are logged as errors with the
    traceback. Database and unexpected errors never expose internals.
    """
    from mediqueue.services._shared.errors import ServiceError, translate_service_error

    _register_jwt_loaders()

    def _emit(status: int, code: str, message: str, *, exc_info: bool = False) -> None:
        level = logging.ERROR if status >= 500 else logging.WARNING
        log.log(
            level,
            "request.failed code=%s status=%s detail=%s",
            code,
            status,
            message,
            exc_info=exc_info,
        )

    @app.errorhandler(APIError)
    def _api_error(err: APIError):
        _emit(err.status_code, err.code, err.message)
        return err.to_response()

    @app.errorhandler(ServiceError)
    def _service_error(err: ServiceError):
        return _api_error(translate_service_error(err))

    @app.errorhandler(HTTPException)
    def _http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        _emit(status, code, message)
        return problem(status, code, message)

    @app.errorhandler(MarshmallowValidationError)
    def _validation_error(err: MarshmallowValidationError):
        _emit(HTTPStatus.UNPROCESSABLE_ENTITY, "validation_error", "Validation failed")
        return problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def _integrity_error(_err: IntegrityError):
        _emit(HTTPStatus.CONFLICT, "conflict", "Resource conflict", exc_info=True)
        return problem(HTTPStatus.CONFLICT, "conflict", "Resource conflict")

    @app.errorhandler(OperationalError)
    def _operational_error(_err: OperationalError):
        message = "Service temporarily unavailable"
        _emit(HTTPStatus.SERVICE_UNAVAILABLE, "service_unavailable", message, exc_info=True)
        return problem(HTTPStatus.SERVICE_UNAVAILABLE, "service_unavailable", message)

    @app.errorhandler(Exception)
    def _unexpected(_err: Exception):
        message = "Unexpected error"
        _emit(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", message, exc_info=True)
        return problem(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", message)

"""Unit tests for service-to-API error translation."""

from __future__ import annotations

import pytest

from mediqueue.core import errors as api_errors
from mediqueue.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    TokenRevokedError,
    translate_service_error,
)


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (AuthenticationError(), 401, "unauthorized"),
        (TokenRevokedError(), 401, "token_revoked"),
        (AuthorizationError(), 403, "forbidden"),
        (NotFoundError("Identity", 1), 404, "not_found"),
        (ConflictError("Identity", "email already in use"), 409, "conflict"),
        (ServiceError("bad"), 400, "bad_request"),
    ],
)
def test_translate_service_error(exc, status, code):
    translated = translate_service_error(exc)
    assert isinstance(translated, api_errors.APIError)
    assert translated.status_code == status
    assert translated.code == code


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nope")
    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"

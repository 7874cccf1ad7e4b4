"""Integration tests for the bearer verifier and role guards."""

from __future__ import annotations

import pytest

from mediqueue.models.user import Role
from tests.factories.user import AdminFactory, DoctorFactory, IdentityFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, bearer, expired_token, issue_token, login

ROUTES = {
    f"{API}/users/me": {Role.PATIENT, Role.DOCTOR, Role.ADMIN},
    f"{API}/doctor/profile": {Role.DOCTOR},
    f"{API}/admin/doctors": {Role.ADMIN},
}

FACTORIES = {Role.PATIENT: IdentityFactory, Role.DOCTOR: DoctorFactory, Role.ADMIN: AdminFactory}


@pytest.mark.parametrize("path", list(ROUTES))
@pytest.mark.parametrize("role", list(Role))
def test_role_matrix(client, path, role):
    identity = FACTORIES[role]()
    token = issue_token(identity.id, role.value)

    resp = client.get(path, headers=bearer(token))

    if role in ROUTES[path]:
        assert resp.status_code == 200
    else:
        assert_problem(resp, 403, "forbidden")


@pytest.mark.parametrize("path", list(ROUTES))
def test_missing_header(client, path):
    assert_problem(client.get(path), 401, "unauthorized")


@pytest.mark.parametrize(
    "header",
    ["Token abc", "Bearer", "Bearer not.a.jwt", "Basic dXNlcjpwYXNz"],
)
def test_malformed_header(client, header):
    resp = client.get(f"{API}/users/me", headers={"Authorization": header})
    assert_problem(resp, 401)


def test_expired_access_token(client):
    identity = IdentityFactory()
    resp = client.get(f"{API}/users/me", headers=bearer(expired_token(identity.id)))
    assert_problem(resp, 401, "token_expired")


def test_refresh_token_rejected_as_bearer(client):
    IdentityFactory(email="p@example.com", password="secret123")
    pair = login(client, "p@example.com", "secret123")
    resp = client.get(f"{API}/users/me", headers=bearer(pair["refreshToken"]))
    assert_problem(resp, 401, "unauthorized")


def test_token_without_role_claim(app, client):
    from flask_jwt_extended import create_access_token

    identity = IdentityFactory()
    token = create_access_token(identity=str(identity.id))
    assert_problem(client.get(f"{API}/users/me", headers=bearer(token)), 401, "unauthorized")


def test_me_returns_profile_without_secrets(client):
    identity = IdentityFactory(name="Pat Doe", email="pat@example.com")
    resp = client.get(f"{API}/users/me", headers=bearer(issue_token(identity.id)))
    assert resp.get_json() == {
        "id": identity.id,
        "name": "Pat Doe",
        "email": "pat@example.com",
        "role": "patient",
        "phone": None,
    }

"""Integration tests for /api/v1/auth (rotation off, the default)."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from tests.factories.user import IdentityFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, bearer, login


class TestRegister:
    def test_register_creates_patient_and_returns_pair(self, client):
        resp = client.post(
            f"{API}/auth/register",
            json={"name": "New Patient", "email": "new@example.com", "password": "secret123"},
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert set(body) == {"accessToken", "refreshToken"}

        me = client.get(f"{API}/users/me", headers=bearer(body["accessToken"]))
        assert me.get_json()["role"] == "patient"

    def test_register_duplicate_email_conflicts(self, client):
        IdentityFactory(email="dup@example.com")
        resp = client.post(
            f"{API}/auth/register",
            json={"name": "Dup", "email": "DUP@example.com", "password": "secret123"},
        )
        assert_problem(resp, 409, "conflict")

    def test_register_validation_error(self, client):
        resp = client.post(f"{API}/auth/register", json={"email": "bad", "password": "x"})
        body = assert_problem(resp, 422, "validation_error")
        assert {"name", "email", "password"} <= set(body["details"]["errors"])


class TestLogin:
    def test_login_returns_camel_case_pair(self, client):
        IdentityFactory(email="patient@example.com", password="secret123")
        body = login(client, "patient@example.com", "secret123")
        assert set(body) == {"accessToken", "refreshToken"}

    def test_login_wrong_password(self, client):
        IdentityFactory(email="patient@example.com", password="secret123")
        resp = client.post(
            f"{API}/auth/login", json={"email": "patient@example.com", "password": "nope"}
        )
        assert_problem(resp, 401, "unauthorized")

    def test_login_inactive_identity(self, client):
        IdentityFactory(email="gone@example.com", password="secret123", is_active=False)
        resp = client.post(
            f"{API}/auth/login", json={"email": "gone@example.com", "password": "secret123"}
        )
        assert_problem(resp, 401, "unauthorized")

    def test_login_does_not_leak_secrets(self, client):
        IdentityFactory(email="patient@example.com", password="secret123")
        body = login(client, "patient@example.com", "secret123")
        assert "password" not in str(body).lower()


class TestRefresh:
    def test_refresh_returns_new_access_token_only(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")

        resp = client.post(f"{API}/auth/refresh", json={"refreshToken": pair["refreshToken"]})

        assert resp.status_code == 200
        body = resp.get_json()
        assert set(body) == {"accessToken"}
        assert client.get(f"{API}/users/me", headers=bearer(body["accessToken"])).status_code == 200

    def test_refresh_twice_with_same_token_succeeds(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")
        for _ in range(2):
            resp = client.post(f"{API}/auth/refresh", json={"refreshToken": pair["refreshToken"]})
            assert resp.status_code == 200

    def test_refresh_missing_token(self, client):
        assert_problem(client.post(f"{API}/auth/refresh", json={}), 401, "unauthorized")

    def test_refresh_garbage_token(self, client):
        resp = client.post(f"{API}/auth/refresh", json={"refreshToken": "garbage"})
        assert_problem(resp, 401, "unauthorized")

    @pytest.mark.parametrize("token", [12345, True, ["a", "b"], {"jwt": "x"}])
    def test_refresh_non_string_token_is_unauthorized(self, client, token):
        resp = client.post(f"{API}/auth/refresh", json={"refreshToken": token})
        assert_problem(resp, 401, "unauthorized")

    @pytest.mark.parametrize("body", [["refreshToken"], "token", 7])
    def test_refresh_non_object_body_is_unauthorized(self, client, body):
        assert_problem(client.post(f"{API}/auth/refresh", json=body), 401, "unauthorized")

    def test_refresh_ignores_unknown_fields(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")
        resp = client.post(
            f"{API}/auth/refresh",
            json={"refreshToken": pair["refreshToken"], "deviceId": "abc"},
        )
        assert resp.status_code == 200

    def test_access_token_is_not_a_refresh_token(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")
        resp = client.post(f"{API}/auth/refresh", json={"refreshToken": pair["accessToken"]})
        assert_problem(resp, 401, "unauthorized")

    def test_superseded_refresh_token_is_revoked(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        first = login(client, "p@example.com", "secret123")
        second = login(client, "p@example.com", "secret123")

        stale = client.post(f"{API}/auth/refresh", json={"refreshToken": first["refreshToken"]})
        assert_problem(stale, 401, "token_revoked")
        live = client.post(f"{API}/auth/refresh", json={"refreshToken": second["refreshToken"]})
        assert live.status_code == 200

    def test_expired_refresh_token(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        with freeze_time("2026-03-01 09:00:00") as frozen:
            pair = login(client, "p@example.com", "secret123")
            frozen.tick(timedelta(days=7, minutes=1))
            resp = client.post(f"{API}/auth/refresh", json={"refreshToken": pair["refreshToken"]})
        assert_problem(resp, 401, "unauthorized")


class TestLogout:
    def test_logout_revokes_refresh_token(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")

        resp = client.post(f"{API}/auth/logout", headers=bearer(pair["accessToken"]))
        assert resp.status_code == 200

        after = client.post(f"{API}/auth/refresh", json={"refreshToken": pair["refreshToken"]})
        assert_problem(after, 401, "token_revoked")

    def test_access_token_stays_valid_after_logout_until_expiry(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")
        client.post(f"{API}/auth/logout", headers=bearer(pair["accessToken"]))

        assert client.get(f"{API}/users/me", headers=bearer(pair["accessToken"])).status_code == 200

    def test_logout_requires_bearer(self, client):
        assert_problem(client.post(f"{API}/auth/logout"), 401, "unauthorized")

    def test_logout_twice_is_ok(self, client):
        IdentityFactory(email="p@example.com", password="secret123")
        pair = login(client, "p@example.com", "secret123")
        for _ in range(2):
            resp = client.post(f"{API}/auth/logout", headers=bearer(pair["accessToken"]))
            assert resp.status_code == 200

"""Integration tests for admin-managed doctor identities."""

from __future__ import annotations

from tests.factories.user import AdminFactory, DoctorFactory, IdentityFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, bearer, issue_token, login


def _admin_headers():
    admin = AdminFactory()
    return bearer(issue_token(admin.id, "admin"))


def test_list_doctors_sorted_by_name(client):
    DoctorFactory(name="Dr. Zed")
    DoctorFactory(name="Dr. Amy")
    IdentityFactory()

    resp = client.get(f"{API}/admin/doctors", headers=_admin_headers())

    assert resp.status_code == 200
    names = [d["name"] for d in resp.get_json()["data"]]
    assert names == ["Dr. Amy", "Dr. Zed"]


def test_create_doctor_then_login_as_doctor(client):
    resp = client.post(
        f"{API}/admin/doctors",
        headers=_admin_headers(),
        json={"name": "Dr. New", "email": "new.doc@example.com", "password": "doctor-pass"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["role"] == "doctor"

    pair = login(client, "new.doc@example.com", "doctor-pass")
    profile = client.get(f"{API}/doctor/profile", headers=bearer(pair["accessToken"]))
    assert profile.status_code == 200
    assert profile.get_json()["email"] == "new.doc@example.com"


def test_create_doctor_duplicate_email(client):
    IdentityFactory(email="taken@example.com")
    resp = client.post(
        f"{API}/admin/doctors",
        headers=_admin_headers(),
        json={"name": "Dr. Dup", "email": "taken@example.com", "password": "doctor-pass"},
    )
    assert_problem(resp, 409, "conflict")


def test_patient_cannot_create_doctor(client):
    patient = IdentityFactory()
    resp = client.post(
        f"{API}/admin/doctors",
        headers=bearer(issue_token(patient.id, "patient")),
        json={"name": "Dr. No", "email": "no@example.com", "password": "doctor-pass"},
    )
    assert_problem(resp, 403, "forbidden")


def test_create_doctor_with_profile_fields(client):
    resp = client.post(
        f"{API}/admin/doctors",
        headers=_admin_headers(),
        json={
            "name": "Dr. Skin",
            "email": "skin@example.com",
            "password": "doctor-pass",
            "speciality": "Dermatologist",
            "fee": 5000,
        },
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert (body["speciality"], body["fee"], body["available"]) == ("Dermatologist", 5000, True)
    assert body["isActive"] is True


def test_create_doctor_negative_fee(client):
    resp = client.post(
        f"{API}/admin/doctors",
        headers=_admin_headers(),
        json={"name": "Dr. Neg", "email": "neg@example.com", "password": "doctor-pass", "fee": -1},
    )
    assert_problem(resp, 422, "validation_error")

"""Integration tests for the public doctor list and availability toggle."""

from __future__ import annotations

from tests.factories.user import AdminFactory, DoctorFactory, IdentityFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.auth import API, bearer, issue_token


def _admin_headers():
    return bearer(issue_token(AdminFactory().id, "admin"))


def test_public_list_needs_no_token_and_hides_contacts(client):
    DoctorFactory(name="Dr. Zed", profile__speciality="Dermatologist", profile__fee=5000)
    DoctorFactory(name="Dr. Amy")
    DoctorFactory(name="Dr. Gone", is_active=False)
    IdentityFactory()

    resp = client.get(f"{API}/doctors")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert [d["name"] for d in data] == ["Dr. Amy", "Dr. Zed"]
    assert data[1] == {
        "id": data[1]["id"],
        "name": "Dr. Zed",
        "speciality": "Dermatologist",
        "fee": 5000,
        "available": True,
    }


def test_public_list_filters_by_speciality(client):
    DoctorFactory(name="Dr. Skin", profile__speciality="Dermatologist")
    DoctorFactory(name="Dr. Kids", profile__speciality="Pediatrician")

    resp = client.get(f"{API}/doctors", query_string={"speciality": "Pediatrician"})

    assert [d["name"] for d in resp.get_json()["data"]] == ["Dr. Kids"]


def test_admin_toggles_availability(client):
    doctor = DoctorFactory()
    headers = _admin_headers()
    url = f"{API}/admin/doctors/{doctor.id}/availability"

    first = client.patch(url, headers=headers)
    assert first.status_code == 200
    assert first.get_json()["available"] is False

    listed = client.get(f"{API}/doctors").get_json()["data"]
    assert listed[0]["available"] is False

    assert client.patch(url, headers=headers).get_json()["available"] is True


def test_toggle_unknown_doctor(client):
    patient = IdentityFactory()
    resp = client.patch(
        f"{API}/admin/doctors/{patient.id}/availability", headers=_admin_headers()
    )
    assert_problem(resp, 404, "not_found")


def test_patient_cannot_toggle(client):
    doctor = DoctorFactory()
    patient = IdentityFactory()
    resp = client.patch(
        f"{API}/admin/doctors/{doctor.id}/availability",
        headers=bearer(issue_token(patient.id, "patient")),
    )
    assert_problem(resp, 403, "forbidden")

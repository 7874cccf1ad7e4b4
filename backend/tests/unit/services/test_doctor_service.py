"""Unit tests for DoctorService."""

from __future__ import annotations

import pytest

from mediqueue.models.doctor import DoctorProfile
from mediqueue.services._shared.errors import ConflictError, NotFoundError, ServiceError
from mediqueue.services.doctors import DoctorCreateIn, DoctorOut, DoctorService
from tests.factories.user import DoctorFactory, IdentityFactory


@pytest.fixture()
def service(app) -> DoctorService:
    return DoctorService()


def test_create_makes_identity_and_profile(service, session):
    out = service.create(
        DoctorCreateIn(
            name="Dr. Who",
            email="Who@Example.com",
            password="secret123",
            speciality="Neurologist",
            fee=2500,
        )
    )
    assert isinstance(out, DoctorOut)
    assert (out.email, out.role, out.speciality, out.fee) == (
        "who@example.com",
        "doctor",
        "Neurologist",
        2500,
    )
    assert out.available is True
    assert session.get(DoctorProfile, out.id) is not None


def test_create_duplicate_email_leaves_nothing_behind(service, session):
    IdentityFactory(email="taken@example.com")
    with pytest.raises(ConflictError):
        service.create(DoctorCreateIn(name="Dr. Dup", email="taken@example.com", password="x" * 8))
    assert session.query(DoctorProfile).count() == 0


def test_create_rejects_blank_speciality(service):
    with pytest.raises(ServiceError):
        service.create(
            DoctorCreateIn(name="Dr. X", email="x@example.com", password="x" * 8, speciality=" ")
        )


def test_list_public_hides_inactive_doctors(service):
    DoctorFactory(name="Dr. Bee")
    DoctorFactory(name="Dr. Ann", profile__available=False)
    DoctorFactory(name="Dr. Off", is_active=False)

    names = [d.name for d in service.list_public()]

    assert names == ["Dr. Ann", "Dr. Bee"]
    assert [d.name for d in service.list_all()] == ["Dr. Ann", "Dr. Bee", "Dr. Off"]


def test_toggle_availability_flips_each_call(service):
    doctor = DoctorFactory()

    assert service.toggle_availability(doctor.id).available is False
    assert service.toggle_availability(doctor.id).available is True


def test_toggle_availability_unknown_doctor(service):
    patient = IdentityFactory()
    with pytest.raises(NotFoundError):
        service.toggle_availability(patient.id)

"""Unit tests for AppointmentService."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from mediqueue.models.doctor import DoctorProfile
from mediqueue.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from mediqueue.services.appointments import (
    AppointmentService,
    BookAppointmentIn,
    CancelAppointmentIn,
)
from tests.factories.doctor import AppointmentFactory
from tests.factories.user import DoctorFactory, IdentityFactory

SLOT = datetime(2030, 5, 6, 9, 30, tzinfo=UTC)


@pytest.fixture()
def service(app) -> AppointmentService:
    return AppointmentService()


@pytest.fixture()
def patient(app):
    return IdentityFactory(name="Pat")


@pytest.fixture()
def doctor(app):
    return DoctorFactory(name="Dr. Kim", profile__fee=4200)


def _book(service, patient, doctor, starts_at=SLOT):
    return service.book(
        BookAppointmentIn(patient_id=patient.id, doctor_id=doctor.id, starts_at=starts_at)
    )


class TestBook:
    def test_copies_fee_and_names(self, service, patient, doctor):
        out = _book(service, patient, doctor)
        assert out.amount == 4200
        assert (out.patient_name, out.doctor_name) == ("Pat", "Dr. Kim")
        assert out.starts_at == SLOT
        assert out.cancelled is False

    def test_naive_and_offset_times_are_stored_as_utc(self, service, patient, doctor):
        plus_two = timezone(timedelta(hours=2))
        out = _book(service, patient, doctor, datetime(2030, 5, 6, 11, 30, tzinfo=plus_two))
        assert out.starts_at == SLOT
        with pytest.raises(ConflictError):
            _book(service, IdentityFactory(), doctor, SLOT.replace(tzinfo=None))

    def test_later_fee_change_does_not_touch_booking(self, service, patient, doctor, session):
        out = _book(service, patient, doctor)
        session.get(DoctorProfile, doctor.id).fee = 9900
        session.commit()

        assert service.list_for_patient(patient.id)[0].amount == out.amount == 4200

    def test_unknown_doctor(self, service, patient):
        with pytest.raises(NotFoundError):
            service.book(BookAppointmentIn(patient_id=patient.id, doctor_id=424242, starts_at=SLOT))

    def test_patient_id_is_not_a_doctor(self, service, patient):
        other = IdentityFactory()
        with pytest.raises(NotFoundError):
            service.book(
                BookAppointmentIn(patient_id=patient.id, doctor_id=other.id, starts_at=SLOT)
            )

    def test_inactive_doctor_is_not_bookable(self, service, patient):
        gone = DoctorFactory(is_active=False)
        with pytest.raises(NotFoundError):
            _book(service, patient, gone)

    def test_unavailable_doctor(self, service, patient):
        busy = DoctorFactory(profile__available=False)
        with pytest.raises(ConflictError):
            _book(service, patient, busy)

    def test_taken_slot(self, service, patient, doctor):
        AppointmentFactory(doctor=doctor, starts_at=SLOT)
        with pytest.raises(ConflictError):
            _book(service, patient, doctor)

    def test_same_time_with_another_doctor_is_fine(self, service, patient, doctor):
        _book(service, patient, doctor)
        assert _book(service, patient, DoctorFactory()).starts_at == SLOT


class TestCancel:
    def test_cancel_releases_slot(self, service, patient, doctor):
        booked = _book(service, patient, doctor)

        out = service.cancel(CancelAppointmentIn(patient_id=patient.id, appointment_id=booked.id))

        assert out.cancelled is True
        rebooked = _book(service, IdentityFactory(), doctor)
        assert rebooked.id != booked.id

    def test_cancel_twice(self, service, patient, doctor):
        booked = _book(service, patient, doctor)
        dto = CancelAppointmentIn(patient_id=patient.id, appointment_id=booked.id)
        service.cancel(dto)
        with pytest.raises(ServiceError) as excinfo:
            service.cancel(dto)
        assert type(excinfo.value) is ServiceError

    def test_cancel_someone_elses(self, service, patient, doctor):
        booked = _book(service, patient, doctor)
        with pytest.raises(AuthorizationError):
            service.cancel(
                CancelAppointmentIn(patient_id=IdentityFactory().id, appointment_id=booked.id)
            )

    def test_cancel_unknown(self, service, patient):
        with pytest.raises(NotFoundError):
            service.cancel(CancelAppointmentIn(patient_id=patient.id, appointment_id=31337))


class TestListings:
    def test_patient_sees_only_own_newest_first(self, service, patient, doctor):
        first = _book(service, patient, doctor, SLOT)
        second = _book(service, patient, doctor, SLOT - timedelta(days=1))
        _book(service, IdentityFactory(), doctor, SLOT + timedelta(hours=1))

        assert [a.id for a in service.list_for_patient(patient.id)] == [second.id, first.id]

    def test_doctor_schedule_in_slot_order(self, service, patient, doctor):
        later = _book(service, patient, doctor, SLOT + timedelta(hours=1))
        sooner = _book(service, patient, doctor, SLOT)
        dropped = _book(service, patient, doctor, SLOT + timedelta(hours=2))
        service.cancel(CancelAppointmentIn(patient_id=patient.id, appointment_id=dropped.id))

        assert [a.id for a in service.list_for_doctor(doctor.id)] == [sooner.id, later.id]
        assert len(service.list_for_doctor(doctor.id, include_cancelled=True)) == 3

"""Factory Boy definitions for doctor profiles and appointments."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import factory

from mediqueue.models.appointment import Appointment
from mediqueue.models.doctor import DoctorProfile
from tests.factories import BaseFactory
from tests.factories.user import IdentityFactory


class DoctorProfileFactory(BaseFactory):
    """Profile for an existing doctor identity (pass ``identity=``)."""

    class Meta:
        model = DoctorProfile

    speciality = "General physician"
    fee = 3000
    available = True


class AppointmentFactory(BaseFactory):
    """Live appointment; pass ``doctor=`` (a ``DoctorFactory`` identity)."""

    class Meta:
        model = Appointment

    id = None
    patient = factory.SubFactory(IdentityFactory)
    starts_at = factory.Sequence(
        lambda n: datetime(2030, 1, 7, 9, 0, tzinfo=UTC) + timedelta(minutes=30 * n)
    )
    amount = 3000
    cancelled = False

"""Factory Boy definition for :class:`mediqueue.models.user.Identity`."""

from __future__ import annotations

import factory

from mediqueue.models.user import Identity, Role
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class IdentityFactory(BaseFactory):
    """Build persisted :class:`Identity` rows (patients unless told otherwise)."""

    class Meta:
        model = Identity

    id = None  # let autoincrement handle it
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"identity{n}@example.com")
    role = Role.PATIENT
    is_active = True
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or DEFAULT_PASSWORD


class DoctorFactory(IdentityFactory):
    """Doctor identity with a bookable profile (``profile__fee=...`` to tune it)."""

    role = Role.DOCTOR
    name = factory.Sequence(lambda n: f"Dr. Doctor {n}")
    profile = factory.RelatedFactory(
        "tests.factories.doctor.DoctorProfileFactory", factory_related_name="identity"
    )


class AdminFactory(IdentityFactory):
    role = Role.ADMIN

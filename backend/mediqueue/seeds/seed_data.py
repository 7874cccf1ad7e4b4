"""Idempotent seeders for demo patients, demo doctors and the configured admin.

Each seeder returns a :class:`collections.Counter` with ``created`` and
``existing`` tallies; re-running a seeder only ever increments ``existing``.
"""

from __future__ import annotations

import logging
from collections import Counter

from flask import current_app

from mediqueue.models.user import Role
from mediqueue.services.doctors import DoctorCreateIn, create_doctor
from mediqueue.services.identity import IdentityCreateIn, IdentityService, create_identity
from mediqueue.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)

DEMO_PASSWORD = "secret123"

DEMO_PATIENTS: tuple[IdentityCreateIn, ...] = (
    IdentityCreateIn("Demo Patient", "patient@example.com", DEMO_PASSWORD, Role.PATIENT),
    IdentityCreateIn("Jamie Lee", "jamie.lee@example.com", DEMO_PASSWORD, Role.PATIENT),
)

DEMO_DOCTORS: tuple[DoctorCreateIn, ...] = (
    DoctorCreateIn("Dr. Sara Kim", "doctor@example.com", DEMO_PASSWORD, "Dermatologist", 5000),
    DoctorCreateIn(
        "Dr. Maria Garcia", "maria.garcia@example.com", DEMO_PASSWORD, "Pediatrician", 4000
    ),
)


def seed_patients(*, verbose: bool = False) -> Counter[str]:
    """Create the demo patients that do not exist yet."""
    tally: Counter[str] = Counter(created=0, existing=0)
    with SQLAlchemyUnitOfWork() as uow:
        for demo in DEMO_PATIENTS:
            if uow.identities.exists_by_email(demo.email):
                tally["existing"] += 1
                continue
            create_identity(uow.identities, demo)
            tally["created"] += 1
            if verbose:
                LOGGER.debug("seed.identity.created", extra={"role": demo.role.value})
    return tally


def seed_doctors(*, verbose: bool = False) -> Counter[str]:
    """Create the demo doctors, each with a bookable profile."""
    tally: Counter[str] = Counter(created=0, existing=0)
    with SQLAlchemyUnitOfWork() as uow:
        for demo in DEMO_DOCTORS:
            if uow.identities.exists_by_email(demo.email):
                tally["existing"] += 1
                continue
            create_doctor(uow, demo)
            tally["created"] += 1
            if verbose:
                LOGGER.debug("seed.identity.created", extra={"role": Role.DOCTOR.value})
    return tally


def seed_admin(*, verbose: bool = False) -> Counter[str]:
    """Provision the admin from ``ADMIN_EMAIL`` / ``ADMIN_PASSWORD``; skip when unset."""
    config = current_app.config
    tally: Counter[str] = Counter(created=0, existing=0)
    if not config.get("ADMIN_EMAIL") or not config.get("ADMIN_PASSWORD"):
        LOGGER.info("seed.admin.skipped", extra={"reason": "not_configured"})
        return tally
    _, created = IdentityService().ensure_admin(
        email=config["ADMIN_EMAIL"],
        password=config["ADMIN_PASSWORD"],
        name=config.get("ADMIN_NAME") or "Administrator",
    )
    tally["created" if created else "existing"] += 1
    if verbose:
        LOGGER.debug("seed.admin.done", extra={"reason": "created" if created else "existing"})
    return tally


def run_all(*, verbose: bool = False) -> Counter[str]:
    """Run every seeder and return the combined tally."""
    LOGGER.info("seed.run.started")
    total: Counter[str] = Counter(created=0, existing=0)
    for seeder in (seed_patients, seed_doctors, seed_admin):
        total.update(seeder(verbose=verbose))
    return total


__all__ = [
    "DEMO_DOCTORS",
    "DEMO_PASSWORD",
    "DEMO_PATIENTS",
    "run_all",
    "seed_admin",
    "seed_doctors",
    "seed_patients",
]

"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from mediqueue.core.extensions import db
from mediqueue.repositories import (
    AppointmentRepository,
    DoctorProfileRepository,
    IdentityRepository,
)
from mediqueue.uow.base import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Read-write UoW on the Flask-scoped session.

    :ivar identities: Identity repository bound to the UoW session.
    :ivar doctors: Doctor profile repository.
    :ivar appointments: Appointment repository.
    """

    def __init__(self) -> None:
        self.session = db.session
        self.identities = IdentityRepository(session=self.session)
        self.doctors = DoctorProfileRepository(session=self.session)
        self.appointments = AppointmentRepository(session=self.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

"""Common base for application services."""

from __future__ import annotations

from datetime import UTC, datetime

from mediqueue.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


class BaseService:
    """
    Orchestration-only service base.

    Services open a Unit of Work per use case and raise
    :class:`~mediqueue.services._shared.errors.ServiceError` subclasses; the
    API layer renders those as problem responses.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Open a read-write Unit of Work (commit on success, rollback on error)."""
        return SQLAlchemyUnitOfWork()

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(tz=UTC)

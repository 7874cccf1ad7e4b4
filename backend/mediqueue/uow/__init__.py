from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyUnitOfWork

__all__ = ["UnitOfWork", "SQLAlchemyUnitOfWork"]

"""Column mixins shared by mapped models."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Integer surrogate key ``id``, assigned by the database."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """Database-maintained ``created_at`` / ``updated_at`` (timezone aware)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class ReprMixin:
    """``repr`` listing only the attributes named in ``__repr_attrs__``.

    Models holding secrets keep them out of the list so they never reach
    logs or tracebacks.
    """

    __repr_attrs__: ClassVar[tuple[str, ...]] = ("id",)

    def __repr__(self) -> str:
        shown = " ".join(f"{name}={getattr(self, name, None)!r}" for name in self.__repr_attrs__)
        return f"<{type(self).__name__} {shown}>"

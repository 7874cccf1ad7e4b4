"""Repository base class for SQLAlchemy 2.x mapped models.

Repositories stage and query rows; they never commit or roll back, which is
the Unit of Work's job. Public query input (sort tokens, filters, updates)
only ever reaches columns a subclass lists explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from mediqueue.core.extensions import db

E = TypeVar("E")

Columns = Mapping[str, InstrumentedAttribute[Any]]


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Turn ``["-created_at", "name"]`` into ``[("created_at", True), ("name", False)]``."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        field = token.lstrip("-").strip()
        if field:
            parsed.append((field, token.startswith("-")))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable: Columns,
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Order by the whitelisted tokens, then by primary key as a tie-breaker.

    Unknown tokens are dropped silently.
    """
    orders = [
        sortable[field].desc() if desc else sortable[field].asc()
        for field, desc in parse_sort_tokens(tokens)
        if field in sortable
    ]
    if pk_attr is not None:
        orders.append(pk_attr.asc())
    return stmt.order_by(*orders) if orders else stmt


class BaseRepository(Generic[E]):
    """
    Generic persistence for one mapped model.

    Subclasses set :attr:`model` and override the whitelist hooks
    (``_sortable_fields``, ``_filterable_fields``, ``_updatable_fields``).

    :param session: Session of the enclosing Unit of Work; the Flask-scoped
        session when omitted.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else cast(Session, db.session)

    # -- whitelist hooks ------------------------------------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Columns:
        return {}

    def _filterable_fields(self) -> Columns:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    # -- operations -----------------------------------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError(f"{type(self).__name__} has no primary key attribute")
        stmt = select(self.model).where(pk_attr == entity_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted fields through ``setattr`` (validators run) and flush.

        :raises ValueError: If any field is not updatable.
        """
        rejected = sorted(set(fields) - self._updatable_fields())
        if rejected:
            raise ValueError(f"Unknown or non-updatable fields: {rejected}")
        for key, value in fields.items():
            setattr(instance, key, value)
        self.session.flush()
        return instance

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> list[E]:
        """Return rows matching whitelisted equality ``filters`` in a stable order."""
        allowed = self._filterable_fields()
        stmt: Select[Any] = select(self.model).where(
            *(allowed[key] == value for key, value in (filters or {}).items() if key in allowed)
        )
        stmt = apply_sorting(stmt, self._sortable_fields(), sort or (), pk_attr=self._pk_attr())
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return list(self.session.execute(stmt).scalars().all())

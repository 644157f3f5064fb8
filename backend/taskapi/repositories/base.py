"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Pagination with page/limit metadata (``total_pages``, ``total_results``).
- Safe sorting with a whitelist mapping (prevents SQL injection).
- Deterministic pagination (adds primary-key tiebreaker).
- Safe update helpers with per-repository updatable-field whitelists.
- No business logic, no commit/rollback; Services own transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or domain policies.
  - They never call commit/rollback; Services define the Unit of Work.
* Sorting is opt-in per aggregate via ``_sortable_fields`` mapping. Public
  sort expressions look like ``"field:desc,other"``; direction defaults to
  ascending and unknown fields are ignored.
* Updates MUST NOT allow mass-assignment: each repo exposes an explicit
  ``_updatable_fields`` whitelist.

"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from taskapi.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type

DEFAULT_LIMIT = 10


# ------------------------------- Pagination ----------------------------------


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number (clamped to ``>= 1``).
    :type page: int
    :param limit: Page size (clamped to ``>= 1``).
    :type limit: int
    :param sort_by: Public sort expression, e.g. ``"taskDateTime:desc,title"``.
    :type sort_by: str | None
    """

    page: int = 1
    limit: int = DEFAULT_LIMIT
    sort_by: str | None = None


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param results: Entities in the current page.
    :type results: Sequence[E]
    :param page: 1-based current page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param total_results: Number of rows matching the query, ignoring paging.
    :type total_results: int
    """

    results: Sequence[E]
    page: int
    limit: int
    total_results: int

    @property
    def total_pages(self) -> int:
        """Number of pages; never less than one, even for empty results."""
        return max(1, math.ceil(self.total_results / self.limit))


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_by(raw: str | Iterable[str] | None) -> list[tuple[str, bool]]:
    """Parse a public sort expression into ``(field, is_desc)`` tuples.

    Accepts ``"a:desc,b"`` or an iterable of ``"field[:dir]"`` items. Any
    direction other than ``desc`` (case-insensitive) sorts ascending.

    :param raw: Sort expression.
    :type raw: str | Iterable[str] | None
    :returns: List of ``(field_name, is_desc)`` tokens.
    :rtype: list[tuple[str, bool]]
    """
    if not raw:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)

    parsed: list[tuple[str, bool]] = []
    for item in items:
        field, _, direction = item.strip().partition(":")
        field = field.strip()
        if field:
            parsed.append((field, direction.strip().lower() == "desc"))
    return parsed


def _apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    sort_by: str | Iterable[str] | None,
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply safe ``ORDER BY`` clauses based on a whitelist mapping.

    Unknown sort fields are ignored silently. The model's primary key is always
    appended as a final ascending tiebreaker to stabilize pagination.

    :param stmt: Base selectable.
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param sortable_fields: Public field → SQLAlchemy attribute mapping.
    :type sortable_fields: Mapping[str, InstrumentedAttribute]
    :param sort_by: Public sort expression (e.g., ``"createdAt:desc"``).
    :type sort_by: str | Iterable[str] | None
    :param pk_attr: Primary-key attribute used as a tiebreaker.
    :type pk_attr: InstrumentedAttribute | None
    :returns: Modified select with ``ORDER BY`` clauses.
    :rtype: :class:`sqlalchemy.sql.Select`
    """
    orders: list[Any] = []
    for field, is_desc in parse_sort_by(sort_by):
        col = sortable_fields.get(field)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())

    if orders:
        stmt = stmt.order_by(*orders)

    # Always add PK as a final tiebreaker to stabilize pagination
    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())

    return stmt


# --------------------------- Pagination execution ----------------------------


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
) -> tuple[list[Any], int]:
    """Execute a select with pagination and a total count.

    The statement's existing ``ORDER BY`` is stripped for the ``COUNT`` to avoid
    unnecessary sorting overhead.

    :param session: Active SQLAlchemy session.
    :type session: :class:`sqlalchemy.orm.Session`
    :param stmt: Base select to paginate (already filtered/sorted).
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :returns: Tuple of ``(items, total)``.
    :rtype: tuple[list[Any], int]
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    offset = (page - 1) * limit
    sliced = stmt.limit(limit).offset(offset)
    items = list(session.execute(sliced).scalars().all())
    return items, total


def paginate(
    session: Session,
    stmt: Select[Any],
    *,
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    pk_attr: InstrumentedAttribute[Any] | None,
    sort_by: str | None = None,
    limit: int = DEFAULT_LIMIT,
    page: int = 1,
) -> Page[Any]:
    """Sort, slice and count ``stmt`` into a :class:`Page`.

    A page beyond the last one yields empty ``results`` while the totals still
    describe the whole query.
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    stmt = _apply_sorting(stmt, sortable_fields, sort_by, pk_attr=pk_attr)
    items, total = paginate_select(session, stmt, page=page, limit=limit)
    return Page(results=items, page=page, limit=limit, total_results=total)


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define:

    * ``model``: the SQLAlchemy mapped class.

    Subclasses MAY override:

    * ``_sortable_fields`` to expose safe sort keys.
    * ``_updatable_fields`` to whitelist keys allowed for updates.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or cross-aggregate coordination.

    Services orchestrate use cases and own transaction boundaries.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``taskapi.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    # ------------------------------ Session access ---------------------------

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        """Return the model's primary-key attribute (``model.id``) if present."""
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist mapping of public sort keys to model attributes.

        :returns: Public key → ORM attribute mapping.
        :rtype: Mapping[str, InstrumentedAttribute]
        """
        return {}

    def _updatable_fields(self) -> set[str]:
        """Whitelist of attribute names that can be assigned on update.

        :returns: Set of allowed keys for update operations.
        :rtype: set[str]
        """
        return set()

    # ------------------------------ Internals --------------------------------

    def _sanitize_update_fields(
        self,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
    ) -> dict[str, Any]:
        """Return a dict with only whitelisted update keys.

        :param fields: Raw update mapping.
        :type fields: Mapping[str, Any]
        :param strict: When ``True``, raise ``ValueError`` on unknown keys.
        :type strict: bool
        :returns: Filtered mapping with only allowed keys.
        :rtype: dict[str, Any]
        :raises ValueError: If ``strict`` and unknown keys are present.
        """
        allowed = self._updatable_fields()
        if not allowed:
            # Fail-closed by default to avoid accidental mass-assignment
            if fields and strict:
                raise ValueError("No updatable fields configured for this repository.")
            return {}

        unknown = [k for k in fields if k not in allowed]
        if unknown and strict:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")

        return {k: v for k, v in fields.items() if k in allowed}

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK.

        :param instance: New entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key.

        :param entity_id: Primary-key value.
        :type entity_id: Any
        :returns: Entity or ``None``.
        :rtype: E | None
        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = select(self.model).where(pk_attr == entity_id)
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def get_for_update(self, entity_id: Any) -> E | None:
        """Retrieve an entity by PK with a ``FOR UPDATE`` lock (when supported).

        :param entity_id: Primary-key value.
        :type entity_id: Any
        :returns: Locked entity or ``None``.
        :rtype: E | None
        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get_for_update requires a detectable PK.")
        stmt = select(self.model).where(pk_attr == entity_id).with_for_update()
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def delete(self, instance: E) -> None:
        """Hard-delete an entity and flush changes.

        :param instance: Entity to delete.
        :type instance: E
        """
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """Assign only whitelisted keys to ``instance`` and optionally flush.

        The assignment uses ``setattr`` to trigger SQLAlchemy ``@validates``
        decorators defined on the mapped class.

        :param instance: Entity to mutate.
        :type instance: E
        :param fields: Mapping of fields to assign.
        :type fields: Mapping[str, Any]
        :param strict: Raise on unknown keys (recommended True).
        :type strict: bool
        :param flush: Call ``session.flush()`` after assignment.
        :type flush: bool
        :returns: The mutated instance.
        :rtype: E
        :raises ValueError: If ``strict`` and unknown keys are present, or if no
                           updatable fields are configured.
        """
        updates = self._sanitize_update_fields(fields, strict=strict)
        for k, v in updates.items():
            setattr(instance, k, v)
        if flush:
            self.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def paginate(
        self,
        pagination: Pagination,
        *,
        where: Sequence[ColumnElement[bool]] = (),
    ) -> Page[E]:
        """Paginate entities matching ``where`` with stable, whitelisted sorting.

        :param pagination: Pagination parameters.
        :type pagination: Pagination
        :param where: Filter clauses combined with ``AND``; empty matches all.
        :type where: Sequence[ColumnElement[bool]]
        :returns: :class:`Page` with results and metadata.
        :rtype: Page[E]
        """
        stmt: Select[Any] = select(self.model)
        if where:
            stmt = stmt.where(and_(*where))
        return cast(
            Page[E],
            paginate(
                self.session,
                stmt,
                sortable_fields=self._sortable_fields(),
                pk_attr=self._pk_attr(),
                sort_by=pagination.sort_by,
                limit=pagination.limit,
                page=pagination.page,
            ),
        )

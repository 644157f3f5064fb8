"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from taskapi.core.extensions import db
from taskapi.repositories import TaskRepository, TokenRepository, UserRepository
from taskapi.uow.base import UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.tasks = TaskRepository(session=self.session)
        self.tokens = TokenRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent transaction.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
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


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Owns a fresh transaction when the session is idle and rolls it back on
      exit; otherwise it attaches to the running one and leaves it alone.
    - Applies ``SET TRANSACTION READ ONLY`` on PostgreSQL when it owns the
      transaction.
    - Blocks ORM flushes of new/dirty/deleted objects while active.
    - Disallows ``commit()``.

    Callers must copy what they need out of loaded entities before leaving the
    block, since the closing rollback expires them.
    """

    def __init__(self, *, enforce_db_readonly: bool = True) -> None:
        super().__init__(session=db.session)
        self.enforce_db_readonly = enforce_db_readonly
        self._txn_ctx: SessionTransaction | None = None
        self._guard_installed = False
        self._guard_session: Session | None = None

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Enter a read scope, owning the transaction when possible.

        If SQLAlchemy reports that a transaction is already running
        (``InvalidRequestError``), the scope attaches to that outer transaction
        instead. The flush guard still applies, but the effective permissions
        follow the parent transaction.
        """
        self._txn_ctx = None
        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            pass

        self._install_guard()

        if self._txn_ctx is not None and self.enforce_db_readonly:
            dialect = self.session.get_bind().dialect.name
            if dialect == "postgresql":
                try:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
                except SQLAlchemyError as exc:
                    logger.warning("SET TRANSACTION READ ONLY failed (%s); guard only.", exc)

        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Always remove the guard. Roll back only if we own the transaction."""
        try:
            if self._txn_ctx is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                try:
                    self._txn_ctx.__exit__(exc_type, exc, tb)
                finally:
                    self._txn_ctx = None
        finally:
            self._remove_guard()

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards --------------------------------------

    def _before_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _guard_target(self) -> Session:
        # Listen on the thread-local Session, not the shared factory.
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _install_guard(self) -> None:
        if self._guard_installed:
            return
        self._guard_session = self._guard_target()
        event.listen(self._guard_session, "before_flush", self._before_flush)
        self._guard_installed = True

    def _remove_guard(self) -> None:
        if not self._guard_installed:
            return
        with suppress(InvalidRequestError):
            event.remove(self._guard_session, "before_flush", self._before_flush)
        self._guard_installed = False

from __future__ import annotations

from dataclasses import dataclass

from taskapi.core import errors as api_errors
from taskapi.repositories.base import DEFAULT_LIMIT, Pagination
from taskapi.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from taskapi.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.
    * Offer shared validation helpers (pagination/sorting).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int | None, limit: int | None, sort_by: str | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number (defaults to 1).
        :type page: int | None
        :param limit: Page size (defaults to 10).
        :type limit: int | None
        :param sort_by: Sort expression like ``"title:desc,createdAt"``.
        :type sort_by: str | None
        :returns: Pagination instance.
        :rtype: Pagination
        """
        page = max(1, int(page or 1))
        limit = max(1, int(limit or DEFAULT_LIMIT))
        return Pagination(page=page, limit=limit, sort_by=sort_by or None)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, AuthenticationError):
            # → 401 Unauthorized
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(str(exc))

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc

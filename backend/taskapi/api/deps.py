"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from taskapi.core.errors import APIError
from taskapi.core.logger import ensure_request_id
from taskapi.services._shared.base import ServiceContext
from taskapi.services.auth.factory import build_auth_service
from taskapi.services.auth.service import AuthService
from taskapi.services.tasks.service import TaskService

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, non-expired JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


def parse_id(raw: str, *, entity: str = "resource") -> int:
    """Parse a positive integer path id.

    :raises APIError: 400 ``invalid_id`` when ``raw`` is not a positive integer.
    """

    value = raw.strip()
    if not value.isdigit() or int(value) < 1:
        raise APIError(f"Invalid {entity} id: {raw!r}", status_code=400, code="invalid_id")
    return int(value)


def service_context() -> ServiceContext:
    """Build the request-scoped context passed to services."""

    identity = get_jwt_identity()
    actor_id = int(identity) if isinstance(identity, str) and identity.isdigit() else None
    return ServiceContext(actor_id=actor_id, request_id=ensure_request_id())


def get_auth_service() -> AuthService:
    return build_auth_service(current_app.config, ctx=ServiceContext(request_id=ensure_request_id()))


def get_task_service() -> TaskService:
    return TaskService(
        query_timezone=current_app.config.get("TASK_QUERY_TIMEZONE", "UTC"),
        default_limit=int(current_app.config.get("TASKS_DEFAULT_PAGE_SIZE", 10)),
        ctx=service_context(),
    )

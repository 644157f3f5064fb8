"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from taskapi.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate,
    paginate_select,
    parse_sort_by,
)
from taskapi.repositories.task import TaskRepository
from taskapi.repositories.token import TokenRepository
from taskapi.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate",
    "paginate_select",
    "parse_sort_by",
    # Domain
    "TaskRepository",
    "TokenRepository",
    "UserRepository",
]

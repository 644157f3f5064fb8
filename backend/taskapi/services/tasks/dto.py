# taskapi/services/tasks/dto.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TaskCreateIn:
    """
    Input DTO for task creation.

    :param title: Required title.
    :param reminder_date_time: When to remind (aware datetime).
    :param description: Optional free text.
    :param task_date_time: When the task happens; ``None`` means now.
    :param is_completed: Initial completion flag.
    """

    title: str
    reminder_date_time: datetime
    description: str | None = None
    task_date_time: datetime | None = None
    is_completed: bool = False


@dataclass(frozen=True, slots=True)
class TaskQueryIn:
    """
    Input DTO for listing tasks.

    :param title: Case-insensitive substring to search in titles.
    :param date_from: First day of the ``task_date_time`` range.
    :param date_to: Last day of the range (inclusive).
    :param sort_by: Sort expression like ``"taskDateTime:desc"``.
    :param limit: Page size.
    :param page: 1-based page number.
    """

    title: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    sort_by: str | None = None
    limit: int | None = None
    page: int | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TaskOut:
    id: int
    title: str
    description: str | None
    task_date_time: datetime
    reminder_date_time: datetime
    is_completed: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class TaskPageOut:
    """One page of tasks with its pagination metadata."""

    results: Sequence[TaskOut]
    page: int
    limit: int
    total_pages: int
    total_results: int

"""Translate task list filters into SQL clauses."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, tzinfo
from zoneinfo import ZoneInfo

from sqlalchemy import ColumnElement

from taskapi.models.task import Task

# Inclusive end of a day at millisecond precision
END_OF_DAY = time(23, 59, 59, 999000)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape ``%``, ``_`` and the escape character for a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _resolve_tz(tz: str | tzinfo | None) -> tzinfo:
    if tz is None:
        return UTC
    if isinstance(tz, str):
        return UTC if tz.upper() == "UTC" else ZoneInfo(tz)
    return tz


def day_bounds(date_from: date, date_to: date, tz: str | tzinfo | None = None) -> tuple[datetime, datetime]:
    """
    Return ``(start, end)`` in UTC for a day range expressed in ``tz``.

    ``start`` is ``date_from`` at 00:00:00.000 and ``end`` is ``date_to`` at
    23:59:59.999, both local to ``tz``.
    """
    zone = _resolve_tz(tz)
    start = datetime.combine(date_from, time.min, tzinfo=zone)
    end = datetime.combine(date_to, END_OF_DAY, tzinfo=zone)
    return start.astimezone(UTC), end.astimezone(UTC)


def translate_task_filters(
    title_search: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    tz: str | tzinfo | None = None,
) -> list[ColumnElement[bool]]:
    """
    Build the ``WHERE`` clauses for a task listing.

    * ``title_search`` matches titles case-insensitively as a substring.
    * The date range applies only when both bounds are given; a single bound
      is ignored.
    * No inputs produce an empty list, which matches every task.

    :param title_search: Text to look for in titles.
    :param date_from: First day of the range.
    :param date_to: Last day of the range, inclusive.
    :param tz: Timezone the days are expressed in (name or tzinfo).
    :returns: Clauses to combine with ``AND``.
    """
    clauses: list[ColumnElement[bool]] = []

    if title_search:
        pattern = f"%{escape_like(title_search)}%"
        clauses.append(Task.title.ilike(pattern, escape=LIKE_ESCAPE))

    if date_from is not None and date_to is not None:
        start, end = day_bounds(date_from, date_to, tz)
        clauses.append(Task.task_date_time >= start)
        clauses.append(Task.task_date_time < end)

    return clauses

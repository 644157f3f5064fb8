"""Tests for the task filter translation helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from taskapi.services.tasks.query import day_bounds, escape_like, translate_task_filters


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("plain", "plain"),
        ("50%", "50\\%"),
        ("snake_case", "snake\\_case"),
        ("back\\slash", "back\\\\slash"),
    ],
)
def test_escape_like(raw, expected):
    assert escape_like(raw) == expected


def test_day_bounds_in_utc():
    start, end = day_bounds(date(2024, 1, 1), date(2024, 1, 2))

    assert start == datetime(2024, 1, 1, tzinfo=UTC)
    assert end == datetime(2024, 1, 2, 23, 59, 59, 999000, tzinfo=UTC)


def test_day_bounds_follow_named_timezone():
    start, end = day_bounds(date(2024, 7, 1), date(2024, 7, 1), "Europe/Madrid")

    # CEST is UTC+2 in July
    assert start == datetime(2024, 6, 30, 22, 0, tzinfo=UTC)
    assert end - start == timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


def test_no_filters_match_everything():
    assert translate_task_filters() == []


def test_single_date_bound_is_ignored():
    assert translate_task_filters(date_from=date(2024, 1, 1)) == []
    assert translate_task_filters(date_to=date(2024, 1, 1)) == []


def test_title_and_range_produce_three_clauses():
    clauses = translate_task_filters(
        title_search="milk", date_from=date(2024, 1, 1), date_to=date(2024, 1, 31)
    )

    assert len(clauses) == 3

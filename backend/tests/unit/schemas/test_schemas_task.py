# tests/unit/schemas/test_schemas_task.py
from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from marshmallow import ValidationError

from taskapi.schemas.common import PaginationQuerySchema
from taskapi.schemas.task import TaskCreateSchema, TaskQuerySchema, TaskUpdateSchema


def test_create_defaults_and_naive_datetimes_as_utc():
    data = TaskCreateSchema().load(
        {"title": "Pay rent", "reminderDateTime": "2024-03-01T09:00:00", "extra": "ignored"}
    )

    assert data["is_completed"] is False
    assert data["task_date_time"] is None
    assert data["reminder_date_time"] == datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
    assert "extra" not in data


def test_create_requires_title_and_reminder():
    with pytest.raises(ValidationError) as err:
        TaskCreateSchema().load({"title": "   "})

    assert set(err.value.messages) == {"title", "reminderDateTime"}


def test_update_requires_at_least_one_field():
    with pytest.raises(ValidationError) as err:
        TaskUpdateSchema().load({})

    assert err.value.messages["_schema"] == ["At least one field must be provided."]


def test_update_rejects_unknown_field():
    with pytest.raises(ValidationError):
        TaskUpdateSchema().load({"owner": 3})


def test_update_only_allows_completing():
    assert TaskUpdateSchema().load({"isCompleted": True}) == {"is_completed": True}
    with pytest.raises(ValidationError) as err:
        TaskUpdateSchema().load({"isCompleted": False})

    assert "isCompleted" in err.value.messages


def test_query_accepts_dates_and_datetimes():
    data = TaskQuerySchema().load(
        {"dateFrom": "2024-01-05", "dateTo": "2024-01-06T18:30:00Z", "title": "milk"}
    )

    assert data["date_from"] == date(2024, 1, 5)
    assert data["date_to"] == date(2024, 1, 6)
    assert data["title"] == "milk"


def test_query_rejects_garbage_dates():
    with pytest.raises(ValidationError) as err:
        TaskQuerySchema().load({"dateFrom": "yesterday"})

    assert "dateFrom" in err.value.messages


def test_pagination_defaults_and_clamp():
    schema = PaginationQuerySchema(default_limit=10, max_limit=50)

    assert schema.load({}) == {"page": 1, "limit": 10, "sort_by": None}
    assert schema.load({"limit": "500", "page": "2", "sortBy": "title:desc"}) == {
        "page": 2,
        "limit": 50,
        "sort_by": "title:desc",
    }
    with pytest.raises(ValidationError):
        schema.load({"page": "0"})

# tests/unit/models/test_model_task.py
from __future__ import annotations

from datetime import UTC, datetime

import pytest

from taskapi.models.task import Task
from tests.factories.task import TaskFactory


def test_title_and_description_are_trimmed():
    task = Task(title="  Call mom  ", description="  soon ", reminder_date_time=datetime.now(UTC))

    assert task.title == "Call mom"
    assert task.description == "soon"


def test_blank_title_rejected():
    with pytest.raises(ValueError):
        Task(title="   ", reminder_date_time=datetime.now(UTC))


def test_defaults_applied_on_insert(session):
    task = Task(title="Defaults", reminder_date_time=datetime.now(UTC))
    session.add(task)
    session.flush()

    assert task.is_completed is False
    assert task.task_date_time is not None
    assert task.created_at is not None


def test_datetimes_come_back_timezone_aware(session):
    task = TaskFactory()
    session.flush()
    session.expire(task)

    assert task.task_date_time.tzinfo is not None
    assert task.reminder_date_time.utcoffset().total_seconds() == 0

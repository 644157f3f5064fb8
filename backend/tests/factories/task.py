"""Factory Boy definition for :class:`taskapi.models.task.Task`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import factory

from taskapi.models.task import Task
from tests.factories import BaseFactory


class TaskFactory(BaseFactory):
    """Build persisted tasks scheduled one hour from now by default."""

    class Meta:
        model = Task

    id = None
    title = factory.Sequence(lambda n: f"Task {n}")
    description = factory.Faker("sentence")
    task_date_time = factory.LazyFunction(lambda: datetime.now(UTC) + timedelta(hours=1))
    reminder_date_time = factory.LazyAttribute(lambda o: o.task_date_time - timedelta(minutes=15))
    is_completed = False

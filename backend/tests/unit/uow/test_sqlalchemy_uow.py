# tests/unit/uow/test_sqlalchemy_uow.py
from __future__ import annotations

from datetime import UTC, datetime

import pytest

from taskapi.models.task import Task
from taskapi.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def _task(title: str = "t") -> Task:
    return Task(title=title, reminder_date_time=datetime.now(UTC))


def test_rw_commits_on_success(session):
    with SQLAlchemyUnitOfWork() as uow:
        task = uow.tasks.add(_task("kept"))
        task_id = task.id

    assert session.get(Task, task_id) is not None


def test_rw_rolls_back_on_error(session):
    task_id = None
    with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
        task_id = uow.tasks.add(_task("dropped")).id
        raise RuntimeError("boom")

    assert task_id is not None
    assert session.get(Task, task_id) is None


def test_ro_blocks_flush_of_pending_objects(session):
    with pytest.raises(RuntimeError, match="ORM flush blocked"), SQLAlchemyReadOnlyUnitOfWork() as uow:
        uow.session.add(_task())
        uow.session.flush()


def test_ro_disallows_commit(session):
    with SQLAlchemyReadOnlyUnitOfWork() as uow, pytest.raises(RuntimeError):
        uow.commit()


def test_ro_guard_is_removed_on_exit(session):
    with SQLAlchemyReadOnlyUnitOfWork():
        pass

    with SQLAlchemyUnitOfWork() as uow:
        uow.tasks.add(_task("after read scope"))

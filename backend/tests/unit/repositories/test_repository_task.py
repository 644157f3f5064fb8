# tests/unit/repositories/test_repository_task.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskapi.repositories.base import Page, Pagination, parse_sort_by
from taskapi.repositories.task import TaskRepository
from tests.factories.task import TaskFactory


@pytest.fixture()
def repo(session) -> TaskRepository:
    return TaskRepository(session=session)


def test_parse_sort_by():
    assert parse_sort_by("title:desc, taskDateTime ,:asc") == [
        ("title", True),
        ("taskDateTime", False),
    ]
    assert parse_sort_by(None) == []


def test_page_total_pages_is_at_least_one():
    assert Page(results=[], page=1, limit=10, total_results=0).total_pages == 1
    assert Page(results=[], page=1, limit=10, total_results=21).total_pages == 3


def test_paginate_second_page(repo):
    TaskFactory.create_batch(2)

    page = repo.paginate(Pagination(page=2, limit=1))

    assert len(page.results) == 1
    assert page.total_results == 2
    assert page.total_pages == 2


def test_paginate_beyond_last_page_is_empty(repo):
    TaskFactory.create_batch(2)

    page = repo.paginate(Pagination(page=3, limit=1))

    assert page.results == []
    assert page.total_results == 2
    assert page.page == 3


def test_sorting_by_public_key_with_id_tiebreaker(repo):
    when = datetime(2024, 1, 1, tzinfo=UTC)
    late = TaskFactory(task_date_time=when + timedelta(days=2))
    first = TaskFactory(task_date_time=when)
    second = TaskFactory(task_date_time=when)

    page = repo.paginate(Pagination(sort_by="taskDateTime:desc"))

    assert [t.id for t in page.results] == [late.id, first.id, second.id]


def test_unknown_sort_field_is_ignored(repo):
    a = TaskFactory()
    b = TaskFactory()

    page = repo.paginate(Pagination(sort_by="password:desc"))

    assert [t.id for t in page.results] == [a.id, b.id]


def test_assign_updates_is_whitelisted(repo):
    task = TaskFactory(title="Before")

    repo.assign_updates(task, {"title": "After"})
    assert task.title == "After"

    with pytest.raises(ValueError):
        repo.assign_updates(task, {"created_at": datetime.now(UTC)})

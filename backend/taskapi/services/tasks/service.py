# taskapi/services/tasks/service.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from taskapi.models.task import Task
from taskapi.repositories.base import DEFAULT_LIMIT
from taskapi.services._shared.base import BaseService, ServiceContext
from taskapi.services._shared.errors import NotFoundError
from taskapi.services.tasks.dto import TaskCreateIn, TaskOut, TaskPageOut, TaskQueryIn
from taskapi.services.tasks.query import translate_task_filters

log = logging.getLogger(__name__)


def to_task_out(task: Task) -> TaskOut:
    """Copy a loaded :class:`Task` into a detached DTO."""
    return TaskOut(
        id=task.id,
        title=task.title,
        description=task.description,
        task_date_time=task.task_date_time,
        reminder_date_time=task.reminder_date_time,
        is_completed=task.is_completed,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TaskService(BaseService):
    """
    Task CRUD and listing.

    :param query_timezone: Timezone in which ``dateFrom``/``dateTo`` days are read.
    :param default_limit: Page size used when the caller gives none.
    """

    def __init__(
        self,
        *,
        query_timezone: str = "UTC",
        default_limit: int = DEFAULT_LIMIT,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.query_timezone = query_timezone
        self.default_limit = default_limit

    # ------------------------------ Commands ------------------------------

    def create_task(self, dto: TaskCreateIn) -> TaskOut:
        """Persist a task; ``task_date_time`` defaults to now."""
        with self.rw_uow() as uow:
            task = Task(
                title=dto.title,
                description=dto.description,
                task_date_time=dto.task_date_time or datetime.now(UTC),
                reminder_date_time=dto.reminder_date_time,
                is_completed=dto.is_completed,
            )
            uow.tasks.add(task)
            out = to_task_out(task)

        log.info("task.created", extra={"task_id": out.id, "actor_id": self.ctx.actor_id})
        return out

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> TaskOut:
        """
        Apply a partial update; only the given fields change.

        :raises NotFoundError: If the task does not exist.
        """
        with self.rw_uow() as uow:
            task = uow.tasks.get_for_update(task_id)
            if task is None:
                raise NotFoundError("Task", task_id)
            uow.tasks.assign_updates(task, changes)
            out = to_task_out(task)

        log.info(
            "task.updated",
            extra={"task_id": task_id, "actor_id": self.ctx.actor_id},
        )
        return out

    def delete_task(self, task_id: int) -> None:
        """
        Hard-delete a task.

        :raises NotFoundError: If the task does not exist.
        """
        with self.rw_uow() as uow:
            task = uow.tasks.get(task_id)
            if task is None:
                raise NotFoundError("Task", task_id)
            uow.tasks.delete(task)

        log.info("task.deleted", extra={"task_id": task_id, "actor_id": self.ctx.actor_id})

    # ------------------------------- Queries -------------------------------

    def get_task(self, task_id: int) -> TaskOut:
        """
        :raises NotFoundError: If the task does not exist.
        """
        with self.ro_uow() as uow:
            task = uow.tasks.get(task_id)
            if task is None:
                raise NotFoundError("Task", task_id)
            return to_task_out(task)

    def list_tasks(self, query: TaskQueryIn) -> TaskPageOut:
        """Filter by title/date range, then sort and paginate."""
        where = translate_task_filters(
            title_search=query.title,
            date_from=query.date_from,
            date_to=query.date_to,
            tz=self.query_timezone,
        )
        pagination = self.ensure_pagination(
            page=query.page,
            limit=query.limit or self.default_limit,
            sort_by=query.sort_by,
        )
        with self.ro_uow() as uow:
            page = uow.tasks.paginate(pagination, where=where)
            results = [to_task_out(t) for t in page.results]

        return TaskPageOut(
            results=results,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            total_results=page.total_results,
        )

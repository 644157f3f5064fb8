"""Task repository."""

from __future__ import annotations

from taskapi.models.task import Task
from taskapi.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Persistence-only repository for :class:`Task`."""

    model = Task

    def _sortable_fields(self):
        """Public sort keys; both wire (camelCase) and attribute names resolve."""
        return {
            "id": Task.id,
            "title": Task.title,
            "taskDateTime": Task.task_date_time,
            "task_date_time": Task.task_date_time,
            "reminderDateTime": Task.reminder_date_time,
            "reminder_date_time": Task.reminder_date_time,
            "isCompleted": Task.is_completed,
            "is_completed": Task.is_completed,
            "createdAt": Task.created_at,
            "created_at": Task.created_at,
            "updatedAt": Task.updated_at,
            "updated_at": Task.updated_at,
        }

    def _updatable_fields(self):
        return {
            "title",
            "description",
            "task_date_time",
            "reminder_date_time",
            "is_completed",
        }

"""Task model definition."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Boolean, Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, validates

from taskapi.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Task(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A scheduled to-do item with a reminder.

    Fields
    ------
    title : str
        Required, trimmed.
    description : str | None
        Optional free text, trimmed.
    task_date_time : datetime
        When the task happens. Defaults to the insertion time.
    reminder_date_time : datetime
        When the client should be reminded.
    is_completed : bool
        Completion flag, ``False`` on creation unless stated otherwise.
    """

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    task_date_time: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=_utcnow
    )
    reminder_date_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    is_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (Index("ix_tasks_task_date_time", "task_date_time"),)

    @validates("title")
    def _normalize_title(self, key: str, value: str) -> str:
        """Trim the title; an empty title is rejected."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Title is required.")
        return value.strip()

    @validates("description")
    def _normalize_description(self, key: str, value: str | None) -> str | None:
        """Trim the description, keeping ``None`` as is."""
        if value is None:
            return None
        return value.strip()

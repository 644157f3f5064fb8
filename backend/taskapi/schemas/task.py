"""Task resource schemas."""

from __future__ import annotations

from datetime import UTC
from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

from .common import DayField, PaginationQuerySchema, not_blank


class TaskCreateSchema(Schema):
    """Payload for creating a task; unknown keys are dropped."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=[not_blank, validate.Length(max=255)])
    description = fields.String(load_default=None, allow_none=True)
    task_date_time = fields.AwareDateTime(
        data_key="taskDateTime", default_timezone=UTC, load_default=None, allow_none=True
    )
    reminder_date_time = fields.AwareDateTime(
        data_key="reminderDateTime", default_timezone=UTC, required=True
    )
    is_completed = fields.Boolean(data_key="isCompleted", load_default=False)


class TaskUpdateSchema(Schema):
    """Partial update payload; at least one field is required.

    ``isCompleted`` may only be set to ``true``.
    """

    title = fields.String(validate=[not_blank, validate.Length(max=255)])
    description = fields.String(allow_none=True)
    task_date_time = fields.AwareDateTime(data_key="taskDateTime", default_timezone=UTC)
    reminder_date_time = fields.AwareDateTime(data_key="reminderDateTime", default_timezone=UTC)
    is_completed = fields.Boolean(data_key="isCompleted", validate=validate.Equal(True))

    @validates_schema
    def _require_one_field(self, data: dict[str, Any], **_: Any) -> None:
        if not data:
            raise ValidationError("At least one field must be provided.")


class TaskQuerySchema(PaginationQuerySchema):
    """Query string for listing tasks."""

    title = fields.String(load_default=None)
    date_from = DayField(data_key="dateFrom", load_default=None)
    date_to = DayField(data_key="dateTo", load_default=None)


class TaskSchema(Schema):
    """Public representation of a task."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String(allow_none=True)
    task_date_time = fields.DateTime(data_key="taskDateTime")
    reminder_date_time = fields.DateTime(data_key="reminderDateTime")
    is_completed = fields.Boolean(data_key="isCompleted")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")

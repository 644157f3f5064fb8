"""Task endpoints; every route requires an access token."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from taskapi.api.deps import get_task_service, json_response, parse_id, require_auth, timing
from taskapi.schemas import (
    TaskCreateSchema,
    TaskQuerySchema,
    TaskSchema,
    TaskUpdateSchema,
    build_page,
)
from taskapi.services.tasks.dto import TaskCreateIn, TaskQueryIn

bp = Blueprint("tasks", __name__)

task_schema = TaskSchema()
create_schema = TaskCreateSchema()
update_schema = TaskUpdateSchema()


@bp.post("")
@require_auth
@timing
def create_task():
    """Create a task."""

    data = create_schema.load(request.get_json(silent=True) or {})
    task = get_task_service().create_task(TaskCreateIn(**data))
    return json_response({"data": task_schema.dump(task)}, status=201)


@bp.get("")
@require_auth
@timing
def list_tasks():
    """List tasks filtered by ``title`` and ``dateFrom``/``dateTo``, paginated."""

    query_schema = TaskQuerySchema(
        default_limit=int(current_app.config.get("TASKS_DEFAULT_PAGE_SIZE", 10))
    )
    args = query_schema.load(request.args)
    page = get_task_service().list_tasks(TaskQueryIn(**args))
    return json_response({"data": build_page(page, task_schema)})


@bp.get("/<task_id>")
@require_auth
@timing
def get_task(task_id: str):
    """Return a single task."""

    task = get_task_service().get_task(parse_id(task_id, entity="task"))
    return json_response({"data": task_schema.dump(task)})


@bp.patch("/<task_id>")
@require_auth
@timing
def update_task(task_id: str):
    """Apply a partial update to a task."""

    tid = parse_id(task_id, entity="task")
    changes = update_schema.load(request.get_json(silent=True) or {})
    task = get_task_service().update_task(tid, changes)
    return json_response({"data": task_schema.dump(task)})


@bp.delete("/<task_id>")
@require_auth
@timing
def delete_task(task_id: str):
    """Delete a task."""

    get_task_service().delete_task(parse_id(task_id, entity="task"))
    return "", 204

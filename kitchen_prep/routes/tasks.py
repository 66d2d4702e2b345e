"""Task CRUD endpoints."""

import logging

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from kitchen_prep.errors import error_response, validation_error_response
from kitchen_prep.schemas import TaskCreateSchema, TaskFilterSchema, TaskSchema, TaskUpdateSchema
from kitchen_prep.schemas.task import MAX_ID
from kitchen_prep.services import (
    EmptyUpdateError,
    TaskNotFoundError,
    create_task,
    delete_task,
    list_tasks,
    update_task,
)
from kitchen_prep.telemetry import get_meter, get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)
meter = get_meter(__name__)

tasks_created = meter.create_counter(
    name="tasks.created",
    description="Tasks created",
    unit="1",
)

tasks_completed = meter.create_counter(
    name="tasks.completed",
    description="Tasks marked done",
    unit="1",
)

tasks_bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")


def _parse_task_id(raw: str) -> int | None:
    if not (raw.isascii() and raw.isdigit()):
        return None
    task_id = int(raw)
    if task_id > MAX_ID:
        return None
    return task_id


@tasks_bp.route("", methods=["GET"])
def get_tasks():
    """List tasks with optional filters.

    Query params:
        station_id: Owning station id
        target_date: Due date (YYYY-MM-DD)
        is_done: true or false

    Returns:
        JSON array of tasks, high priority first.
    """
    try:
        filters = TaskFilterSchema().load(request.args)
    except ValidationError as err:
        return validation_error_response(err)

    try:
        tasks = list_tasks(**filters)
    except SQLAlchemyError:
        logger.exception("Error fetching tasks")
        return error_response("Failed to fetch tasks", 500)

    return jsonify(TaskSchema(many=True).dump(tasks))


@tasks_bp.route("", methods=["POST"])
def post_task():
    """Create a task.

    Returns:
        JSON response with the created task, 201.
    """
    with tracer.start_as_current_span("task.create") as span:
        try:
            data = TaskCreateSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        span.set_attribute("station.id", data["station_id"])

        try:
            task = create_task(**data)
        except SQLAlchemyError:
            logger.exception("Error creating task")
            return error_response("Failed to create task", 500)

        span.set_attribute("task.id", task.id)
        tasks_created.add(1, {"priority": task.priority})

        return jsonify(TaskSchema().dump(task)), 201


@tasks_bp.route("/<task_id>", methods=["PATCH"])
def patch_task(task_id: str):
    """Apply a partial update to a task.

    Args:
        task_id: Task id from the URL.

    Returns:
        JSON response with the updated task.
    """
    with tracer.start_as_current_span("task.update") as span:
        parsed_id = _parse_task_id(task_id)
        if parsed_id is None:
            return error_response("Invalid task ID", 400)
        span.set_attribute("task.id", parsed_id)

        try:
            changes = TaskUpdateSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return validation_error_response(err)

        try:
            task = update_task(parsed_id, changes)
        except EmptyUpdateError as err:
            return error_response(str(err), 400)
        except TaskNotFoundError:
            return error_response("Task not found", 404)
        except SQLAlchemyError:
            logger.exception("Error updating task")
            return error_response("Failed to update task", 500)

        if changes.get("is_done") is True:
            tasks_completed.add(1)

        return jsonify(TaskSchema().dump(task))


@tasks_bp.route("/<task_id>", methods=["DELETE"])
def remove_task(task_id: str):
    """Delete a task. Deleting an unknown id still succeeds.

    Args:
        task_id: Task id from the URL.
    """
    with tracer.start_as_current_span("task.delete") as span:
        parsed_id = _parse_task_id(task_id)
        if parsed_id is None:
            return error_response("Invalid task ID", 400)
        span.set_attribute("task.id", parsed_id)

        try:
            delete_task(parsed_id)
        except SQLAlchemyError:
            logger.exception("Error deleting task")
            return error_response("Failed to delete task", 500)

        return jsonify({"success": True})

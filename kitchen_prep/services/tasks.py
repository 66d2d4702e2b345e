"""Task queries.

Listing always orders high-priority tasks before normal ones, then oldest
first within each priority, whatever filters are applied.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from sqlalchemy import case
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import contains_eager

from kitchen_prep.extensions import db
from kitchen_prep.models import PRIORITY_HIGH, PRIORITY_NORMAL, Task
from kitchen_prep.services.dates import tomorrow, utc_today
from kitchen_prep.services.exceptions import EmptyUpdateError, TaskNotFoundError


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "details", "priority", "target_date", "is_done"})

_priority_rank = case((Task.priority == PRIORITY_HIGH, 0), else_=1)


def list_tasks(
    station_id: int | None = None,
    target_date: date | None = None,
    is_done: bool | None = None,
) -> list[Task]:
    """List tasks joined with their station.

    Each filter left as None is not applied; the rest are combined with AND.

    Args:
        station_id: Only tasks owned by this station.
        target_date: Only tasks due on this date.
        is_done: Only tasks with this completion flag.

    Returns:
        Matching tasks, high priority first, then by creation time.
    """
    query = (
        db.session.query(Task)
        .join(Task.station)
        .options(contains_eager(Task.station))
    )

    if station_id is not None:
        query = query.filter(Task.station_id == station_id)
    if target_date is not None:
        query = query.filter(Task.target_date == target_date)
    if is_done is not None:
        query = query.filter(Task.is_done == is_done)

    return query.order_by(_priority_rank, Task.created_at.asc(), Task.id.asc()).all()


def create_task(
    station_id: int,
    title: str,
    details: str | None = None,
    priority: str = PRIORITY_NORMAL,
    target_date: date | None = None,
    created_by: str | None = None,
    today: date | None = None,
) -> Task:
    """Insert a task.

    The station is not looked up first; an unknown ``station_id`` fails on
    the foreign key and the error propagates after rollback.

    Args:
        station_id: Owning station.
        title: Non-empty title.
        details: Optional free text.
        priority: "normal" or "high".
        target_date: Due date. Defaults to the day after ``today``.
        created_by: Optional author name.
        today: Reference date for the default. Defaults to the UTC date.

    Returns:
        The stored task with id, timestamp and station loaded.
    """
    if target_date is None:
        target_date = tomorrow(today if today is not None else utc_today())

    task = Task(
        station_id=station_id,
        title=title,
        details=details,
        priority=priority,
        target_date=target_date,
        created_by=created_by,
    )
    try:
        db.session.add(task)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    logger.info(
        f"Task created: {task.title}",
        extra={"task_id": task.id, "station_id": station_id},
    )
    return task


def update_task(task_id: int, changes: Mapping[str, Any]) -> Task:
    """Apply a partial update.

    Every key in ``changes`` is written, including falsy values; fields not
    in ``changes`` keep their stored value.

    Args:
        task_id: Task to update.
        changes: Field name to new value, restricted to UPDATABLE_FIELDS.

    Returns:
        The updated task.

    Raises:
        EmptyUpdateError: If ``changes`` is empty. Storage is not touched.
        ValueError: If ``changes`` names a field that cannot be updated.
        TaskNotFoundError: If no task has ``task_id``.
    """
    if not changes:
        raise EmptyUpdateError()

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    task = db.session.get(Task, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)

    for field, value in changes.items():
        setattr(task, field, value)

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    logger.info(f"Task updated: {task.id}", extra={"fields": sorted(changes)})
    return task


def delete_task(task_id: int) -> None:
    """Delete a task. Unknown ids are a no-op."""
    try:
        deleted = db.session.query(Task).filter(Task.id == task_id).delete()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    logger.info(f"Task deleted: {task_id}", extra={"rows": deleted})


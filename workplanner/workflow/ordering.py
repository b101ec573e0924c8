"""Order allocation for tasks and sprints.

``order`` is a display rank inside a bucket, not a dense sequence. New entries
are appended after the current maximum; existing siblings are never shifted,
so gaps and (under concurrent appends) equal ranks are expected and consumers
simply sort ascending.
"""
from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from workplanner.models import Sprint, TaskItem, TaskStatus


def allocate(existing_orders: Iterable[Optional[int]], requested_order: int = 0) -> int:
    """Return the order for an entry joining a bucket.

    A positive ``requested_order`` is an explicit position and is used
    verbatim. Otherwise the entry goes after the largest existing order, or
    at ``1`` in an empty bucket.
    """
    if requested_order is not None and requested_order > 0:
        return requested_order

    current = max((order for order in existing_orders if order is not None), default=0)
    return current + 1


def task_bucket_orders(
    db: Session,
    project_id: int,
    sprint_id: Optional[int],
    status: TaskStatus,
) -> list:
    """Orders of the tasks in the (project, sprint-or-backlog, status) bucket."""
    stmt = select(TaskItem.order).where(TaskItem.project_id == project_id, TaskItem.status == status)
    if sprint_id is None:
        stmt = stmt.where(TaskItem.sprint_id.is_(None))
    else:
        stmt = stmt.where(TaskItem.sprint_id == sprint_id)
    return list(db.execute(stmt).scalars())


def next_task_order(
    db: Session,
    project_id: int,
    sprint_id: Optional[int],
    status: TaskStatus,
    requested_order: int = 0,
) -> int:
    if requested_order is not None and requested_order > 0:
        return requested_order
    orders = task_bucket_orders(db, project_id, sprint_id, status)
    return allocate(orders, requested_order)


def next_sprint_order(db: Session, project_id: int) -> int:
    # Archived sprints count too, so a sprint order is never handed out twice.
    max_value = db.execute(
        select(func.max(Sprint.order)).where(Sprint.project_id == project_id)
    ).scalar_one_or_none()
    return allocate([max_value])

"""Task status/bucket rules.

A task lives either in the backlog (no sprint, ``Backlog`` status) or in a
sprint with one of the board statuses. Sprint and status are always checked
together.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from workplanner.models import Sprint, TaskItem, TaskStatus
from workplanner.workflow.access import is_member
from workplanner.workflow.errors import (
    BacklogStatusMismatch,
    InvalidAssignee,
    InvalidSprintReference,
    SprintStatusMismatch,
    ValidationError,
)


def validate_bucket(sprint_id: Optional[int], status: TaskStatus) -> None:
    if sprint_id is None:
        if status != TaskStatus.BACKLOG:
            raise BacklogStatusMismatch()
    elif status == TaskStatus.BACKLOG:
        raise SprintStatusMismatch()


def validate_sprint_reference(db: Session, project_id: int, sprint_id: Optional[int]) -> Optional[Sprint]:
    if sprint_id is None:
        return None
    sprint = (
        db.query(Sprint)
        .filter(Sprint.id == sprint_id, Sprint.project_id == project_id, Sprint.is_archived.is_(False))
        .first()
    )
    if sprint is None:
        raise InvalidSprintReference()
    return sprint


def validate_assignee(db: Session, project_id: int, assignee_id: Optional[int]) -> None:
    if assignee_id is not None and not is_member(db, project_id, assignee_id):
        raise InvalidAssignee()


def validate_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Title is required.")
    return cleaned


def apply_completion_rule(task: TaskItem, now: Optional[datetime] = None) -> None:
    """Keep ``completed_at`` set exactly while the task is Done."""
    if task.status == TaskStatus.DONE:
        if task.completed_at is None:
            task.completed_at = now or datetime.now(timezone.utc)
    else:
        task.completed_at = None


def coerce_status(status) -> TaskStatus:
    try:
        return TaskStatus(status)
    except ValueError as exc:
        raise ValidationError(f"Unknown status '{status}'.") from exc

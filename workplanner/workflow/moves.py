"""Atomic task moves between backlog, sprints and status columns.

A move re-buckets a task (sprint, status) and gives it a rank inside the
target bucket in one transaction: either all of sprint, status, order and
completion timestamp change, or none of them do. Moves into a sprint also
claim the project's version, so they serialize with sprint transitions.
"""
import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from workplanner.models import Project, TaskItem, TaskStatus
from workplanner.workflow.access import authorize_task
from workplanner.workflow.concurrency import claim_version, run_in_transaction
from workplanner.workflow.ordering import next_task_order
from workplanner.workflow.validation import (
    apply_completion_rule,
    coerce_status,
    validate_bucket,
    validate_sprint_reference,
)

logger = logging.getLogger(__name__)


class MoveOrchestrator:
    """Drag-and-drop moves for one request, bound to its session."""

    def __init__(self, db: Session, retries: Optional[int] = None):
        self.db = db
        self.retries = retries

    def move_task(
        self,
        actor_id: int,
        task_id: int,
        target_sprint_id: Optional[int],
        target_status: Union[TaskStatus, str],
        requested_order: int = 0,
    ) -> TaskItem:
        target_status = coerce_status(target_status)

        def attempt() -> TaskItem:
            task = authorize_task(self.db, actor_id, task_id)
            # Seen before the sprint check so a concurrent archive is caught.
            project_version = self.db.get(Project, task.project_id).version
            validate_bucket(target_sprint_id, target_status)
            validate_sprint_reference(self.db, task.project_id, target_sprint_id)

            order = next_task_order(
                self.db, task.project_id, target_sprint_id, target_status, requested_order
            )
            claim_version(self.db, TaskItem, task.id, task.version)
            if target_sprint_id is not None:
                claim_version(self.db, Project, task.project_id, project_version)

            task.sprint_id = target_sprint_id
            task.status = target_status
            task.order = order
            apply_completion_rule(task)
            return task

        task = run_in_transaction(self.db, attempt, self.retries)
        logger.info(
            "Task %s moved to sprint=%s status=%s order=%s by user %s",
            task_id,
            target_sprint_id,
            target_status.value,
            task.order,
            actor_id,
        )
        return task

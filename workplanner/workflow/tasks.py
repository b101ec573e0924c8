"""Task create/update/delete under the same bucket rules as moves."""
import logging
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from workplanner.models import Project, TaskItem, TaskStatus
from workplanner.workflow.access import authorize, authorize_task, member_project_ids, visible_task
from workplanner.workflow.concurrency import claim_version, run_in_transaction
from workplanner.workflow.errors import ValidationError
from workplanner.workflow.ordering import next_task_order
from workplanner.workflow.validation import (
    apply_completion_rule,
    coerce_status,
    validate_assignee,
    validate_bucket,
    validate_sprint_reference,
    validate_title,
)

logger = logging.getLogger(__name__)


class TaskWorkflow:
    def __init__(self, db: Session, retries: Optional[int] = None):
        self.db = db
        self.retries = retries

    def list_tasks(
        self,
        actor_id: int,
        project_id: Optional[int] = None,
        sprint_id: Optional[int] = None,
        status: Optional[Union[TaskStatus, str]] = None,
    ) -> List[TaskItem]:
        query = self.db.query(TaskItem).filter(TaskItem.project_id.in_(member_project_ids(self.db, actor_id)))
        if project_id is not None:
            query = query.filter(TaskItem.project_id == project_id)
        if sprint_id is not None:
            query = query.filter(TaskItem.sprint_id == sprint_id)
        if status is not None:
            query = query.filter(TaskItem.status == coerce_status(status))
        return query.order_by(TaskItem.order.asc(), TaskItem.id.asc()).all()

    def get_task(self, actor_id: int, task_id: int) -> TaskItem:
        return visible_task(self.db, actor_id, task_id)

    def create_task(
        self,
        actor_id: int,
        *,
        project_id: int,
        title: str,
        description: Optional[str] = None,
        status: Union[TaskStatus, str] = TaskStatus.BACKLOG,
        sprint_id: Optional[int] = None,
        assignee_id: Optional[int] = None,
        order: int = 0,
    ) -> TaskItem:
        if not project_id or project_id <= 0:
            raise ValidationError("ProjectId is required.")
        title = validate_title(title)
        status = coerce_status(status)

        def attempt() -> TaskItem:
            project = authorize(self.db, actor_id, project_id)
            project_version = project.version
            validate_assignee(self.db, project_id, assignee_id)
            validate_sprint_reference(self.db, project_id, sprint_id)
            validate_bucket(sprint_id, status)
            task = TaskItem(
                project_id=project_id,
                title=title,
                description=(description or "").strip(),
                status=status,
                sprint_id=sprint_id,
                assignee_id=assignee_id,
                order=next_task_order(self.db, project_id, sprint_id, status, order),
            )
            apply_completion_rule(task)
            if sprint_id is not None:
                claim_version(self.db, Project, project_id, project_version)
            self.db.add(task)
            self.db.flush()
            return task

        task = run_in_transaction(self.db, attempt, self.retries)
        logger.info("Task %s created in project %s by user %s", task.id, project_id, actor_id)
        return task

    def update_task(
        self,
        actor_id: int,
        task_id: int,
        *,
        title: str,
        description: Optional[str] = None,
        status: Union[TaskStatus, str],
        sprint_id: Optional[int] = None,
        assignee_id: Optional[int] = None,
        order: int = 0,
    ) -> TaskItem:
        status = coerce_status(status)

        def attempt() -> TaskItem:
            task = authorize_task(self.db, actor_id, task_id)
            project_id = task.project_id
            project_version = self.db.get(Project, project_id).version
            validate_assignee(self.db, project_id, assignee_id)
            validate_sprint_reference(self.db, project_id, sprint_id)
            cleaned_title = validate_title(title)
            validate_bucket(sprint_id, status)

            new_order = next_task_order(self.db, project_id, sprint_id, status, order)
            claim_version(self.db, TaskItem, task.id, task.version)
            if sprint_id is not None:
                claim_version(self.db, Project, project_id, project_version)

            task.title = cleaned_title
            task.description = (description or "").strip()
            task.status = status
            task.assignee_id = assignee_id
            task.sprint_id = sprint_id
            task.order = new_order
            apply_completion_rule(task)
            return task

        task = run_in_transaction(self.db, attempt, self.retries)
        logger.info("Task %s updated by user %s", task_id, actor_id)
        return task

    def delete_task(self, actor_id: int, task_id: int) -> None:
        def attempt() -> None:
            task = authorize_task(self.db, actor_id, task_id)
            self.db.delete(task)

        run_in_transaction(self.db, attempt, self.retries)
        logger.info("Task %s deleted by user %s", task_id, actor_id)

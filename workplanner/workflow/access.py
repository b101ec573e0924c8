"""Project membership checks.

Mutations call :func:`authorize` before touching data. Reads go through
:func:`visible_project`, which answers ``NotFound`` to non-members so that the
existence of a project is not revealed to outsiders.
"""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from workplanner.models import Project, ProjectMember, ProjectRole, TaskItem
from workplanner.workflow.errors import Forbidden, NotFound, ValidationError

logger = logging.getLogger(__name__)


def is_member(db: Session, project_id: int, user_id: int) -> bool:
    return (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        .first()
        is not None
    )


def authorize(db: Session, actor_id: int, project_id: int, required_role: ProjectRole = ProjectRole.MEMBER) -> Project:
    """Return the project if ``actor_id`` holds ``required_role`` in it."""
    project = db.query(Project).filter(Project.id == project_id).first()
    if project is None:
        raise NotFound("Project not found.")

    if required_role == ProjectRole.OWNER:
        allowed = project.owner_id == actor_id
    else:
        allowed = is_member(db, project_id, actor_id)

    if not allowed:
        logger.info(
            "User %s denied %s access to project %s", actor_id, required_role.value, project_id
        )
        raise Forbidden()
    return project


def visible_project(db: Session, actor_id: int, project_id: int) -> Project:
    project = (
        db.query(Project)
        .join(ProjectMember, ProjectMember.project_id == Project.id)
        .filter(Project.id == project_id, ProjectMember.user_id == actor_id)
        .first()
    )
    if project is None:
        raise NotFound("Project not found.")
    return project


def member_project_ids(db: Session, actor_id: int):
    """Select of project ids the actor belongs to, for filtering reads."""
    return select(ProjectMember.project_id).where(ProjectMember.user_id == actor_id)


def authorize_task(db: Session, actor_id: int, task_id: int) -> TaskItem:
    """Load a task for mutation and check the actor belongs to its project."""
    task = db.query(TaskItem).filter(TaskItem.id == task_id).first()
    if task is None:
        raise NotFound("Task not found.")
    if task.project_id is None:
        raise ValidationError("Task is missing ProjectId.")
    authorize(db, actor_id, task.project_id)
    return task


def visible_task(db: Session, actor_id: int, task_id: int) -> TaskItem:
    task = (
        db.query(TaskItem)
        .filter(TaskItem.id == task_id, TaskItem.project_id.in_(member_project_ids(db, actor_id)))
        .first()
    )
    if task is None:
        raise NotFound("Task not found.")
    return task

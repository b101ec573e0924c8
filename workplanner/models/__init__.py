"""WorkPlanner Database Models"""
from workplanner.models.user import User, UserRole
from workplanner.models.task import TaskItem, TaskStatus
from workplanner.models.project import Project
from workplanner.models.project_member import ProjectMember, ProjectRole
from workplanner.models.sprint import Sprint, SprintState
from workplanner.models.work_entry import WorkEntry

__all__ = [
    "User",
    "UserRole",
    "Project",
    "ProjectMember",
    "ProjectRole",
    "Sprint",
    "SprintState",
    "TaskItem",
    "TaskStatus",
    "WorkEntry",
]

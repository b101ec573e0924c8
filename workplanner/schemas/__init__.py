"""Pydantic schemas for request/response validation"""
from workplanner.schemas.user import MessageResponse, Token, UserInfo, UserLogin, UserRegister, UserSummary
from workplanner.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from workplanner.schemas.project_member import ProjectMemberAdd, ProjectMemberResponse
from workplanner.schemas.sprint import SprintCreate, SprintResponse, SprintUpdate
from workplanner.schemas.task import TaskCreate, TaskMove, TaskResponse, TaskUpdate
from workplanner.schemas.work_entry import WorkEntryCreate, WorkEntryResponse, WorkEntryUpdate
from workplanner.schemas.summary import DailyHours, DailySummary, TaskHours, WeeklySummary

__all__ = [
    "MessageResponse",
    "Token",
    "UserInfo",
    "UserLogin",
    "UserRegister",
    "UserSummary",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "ProjectMemberAdd",
    "ProjectMemberResponse",
    "SprintCreate",
    "SprintResponse",
    "SprintUpdate",
    "TaskCreate",
    "TaskMove",
    "TaskResponse",
    "TaskUpdate",
    "WorkEntryCreate",
    "WorkEntryResponse",
    "WorkEntryUpdate",
    "DailyHours",
    "DailySummary",
    "TaskHours",
    "WeeklySummary",
]

"""Schemas for tasks"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from workplanner.models import TaskStatus


class TaskCreate(BaseModel):
    project_id: int
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: TaskStatus = TaskStatus.BACKLOG
    assignee_id: Optional[int] = None
    sprint_id: Optional[int] = None
    order: int = 0


class TaskUpdate(BaseModel):
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: TaskStatus
    assignee_id: Optional[int] = None
    sprint_id: Optional[int] = None
    order: int = 0


class TaskMove(BaseModel):
    sprint_id: Optional[int] = None
    status: TaskStatus
    new_order: int = 0


class TaskResponse(BaseModel):
    id: int
    project_id: Optional[int]
    title: str
    description: str
    status: TaskStatus
    created_at: datetime
    completed_at: Optional[datetime]
    assignee_id: Optional[int]
    sprint_id: Optional[int]
    order: int

    class Config:
        from_attributes = True

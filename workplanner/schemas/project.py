"""Schemas for projects"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from workplanner.models import TaskStatus


class ProjectCreate(BaseModel):
    name: str = Field(..., max_length=200)
    enabled_statuses: Optional[List[str]] = None


class ProjectUpdate(BaseModel):
    name: str = Field(..., max_length=200)
    is_archived: bool = False
    enabled_statuses: Optional[List[str]] = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    owner_id: int
    created_at: datetime
    is_archived: bool
    enabled_statuses: List[TaskStatus]

    class Config:
        from_attributes = True

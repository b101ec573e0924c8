"""Schemas for sprints"""
from datetime import date, datetime

from pydantic import BaseModel, Field

from workplanner.models import SprintState


class SprintCreate(BaseModel):
    name: str = Field(..., max_length=200)
    start_date: date
    end_date: date
    is_active: bool = False


class SprintUpdate(SprintCreate):
    is_archived: bool = False


class SprintResponse(BaseModel):
    id: int
    project_id: int
    name: str
    start_date: date
    end_date: date
    is_active: bool
    is_archived: bool
    state: SprintState
    created_at: datetime
    order: int

    class Config:
        from_attributes = True

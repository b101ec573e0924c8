"""Schemas for work entries"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WorkEntryCreate(BaseModel):
    task_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    description: str = Field(default="", max_length=1000)


class WorkEntryUpdate(WorkEntryCreate):
    pass


class WorkEntryResponse(BaseModel):
    id: int
    task_id: int
    start_time: datetime
    end_time: Optional[datetime]
    description: str
    created_at: datetime
    hours: Optional[float]

    class Config:
        from_attributes = True

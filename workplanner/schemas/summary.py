"""Schemas for time summaries"""
from datetime import date
from typing import List

from pydantic import BaseModel


class DailySummary(BaseModel):
    task_id: int
    task_title: str
    total_hours: float
    entry_count: int


class DailyHours(BaseModel):
    date: date
    hours: float


class TaskHours(BaseModel):
    task_id: int
    task_title: str
    total_hours: float


class WeeklySummary(BaseModel):
    week_start: date
    week_end: date
    total_hours: float
    daily_hours: List[DailyHours]
    task_summaries: List[TaskHours]

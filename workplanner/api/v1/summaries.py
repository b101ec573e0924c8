"""Daily and weekly time summaries"""
from collections import OrderedDict
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, joinedload

from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import TaskItem, User, WorkEntry
from workplanner.schemas import DailyHours, DailySummary, TaskHours, WeeklySummary
from workplanner.workflow.access import member_project_ids

router = APIRouter()


def _today() -> date:
    return datetime.now(timezone.utc).date()


def week_start_for(day: date) -> date:
    """Most recent Sunday on or before ``day``."""
    # date.weekday() is Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _closed_entries(db: Session, user_id: int, start: date, end: date) -> List[WorkEntry]:
    """Finished entries that started in ``[start, end)``, in visible projects."""
    return (
        db.query(WorkEntry)
        .options(joinedload(WorkEntry.task))
        .join(TaskItem, TaskItem.id == WorkEntry.task_id)
        .filter(
            TaskItem.project_id.in_(member_project_ids(db, user_id)),
            WorkEntry.end_time.isnot(None),
            WorkEntry.start_time >= datetime.combine(start, time.min),
            WorkEntry.start_time < datetime.combine(end, time.min),
        )
        .order_by(WorkEntry.start_time.asc())
        .all()
    )


@router.get("/daily", response_model=List[DailySummary])
def daily_summary(
    day: Optional[date] = Query(None, alias="date"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    target = day or _today()
    entries = _closed_entries(db, current_user.id, target, target + timedelta(days=1))

    by_task: "OrderedDict[int, DailySummary]" = OrderedDict()
    for entry in entries:
        item = by_task.get(entry.task_id)
        if item is None:
            item = by_task[entry.task_id] = DailySummary(
                task_id=entry.task_id,
                task_title=entry.task.title if entry.task else "Unknown",
                total_hours=0.0,
                entry_count=0,
            )
        item.total_hours += entry.hours
        item.entry_count += 1
    return list(by_task.values())


@router.get("/weekly", response_model=WeeklySummary)
def weekly_summary(
    week_start: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    start = week_start or week_start_for(_today())
    end = start + timedelta(days=7)
    entries = _closed_entries(db, current_user.id, start, end)

    per_day: "OrderedDict[date, float]" = OrderedDict()
    per_task: "OrderedDict[int, TaskHours]" = OrderedDict()
    for entry in entries:
        hours = entry.hours
        day = entry.start_time.date()
        per_day[day] = per_day.get(day, 0.0) + hours

        task_item = per_task.get(entry.task_id)
        if task_item is None:
            task_item = per_task[entry.task_id] = TaskHours(
                task_id=entry.task_id,
                task_title=entry.task.title if entry.task else "Unknown",
                total_hours=0.0,
            )
        task_item.total_hours += hours

    return WeeklySummary(
        week_start=start,
        week_end=end - timedelta(days=1),
        total_hours=sum(entry.hours for entry in entries),
        daily_hours=[DailyHours(date=day, hours=hours) for day, hours in per_day.items()],
        task_summaries=list(per_task.values()),
    )

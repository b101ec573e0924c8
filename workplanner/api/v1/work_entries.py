"""Time tracking endpoints"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session, joinedload

from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import TaskItem, User, WorkEntry
from workplanner.schemas import WorkEntryCreate, WorkEntryResponse, WorkEntryUpdate
from workplanner.workflow.access import authorize_task, member_project_ids
from workplanner.workflow.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC so SQLite round-trips compare cleanly."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _check_window(start_time: datetime, end_time: Optional[datetime]) -> None:
    if end_time is not None and end_time < start_time:
        raise ValidationError("EndTime must be after StartTime.")


def _visible_entries(db: Session, user_id: int):
    return (
        db.query(WorkEntry)
        .join(TaskItem, TaskItem.id == WorkEntry.task_id)
        .filter(TaskItem.project_id.in_(member_project_ids(db, user_id)))
    )


def _load_entry(db: Session, entry_id: int) -> WorkEntry:
    entry = db.query(WorkEntry).options(joinedload(WorkEntry.task)).filter(WorkEntry.id == entry_id).first()
    if entry is None:
        raise NotFound("Work entry not found.")
    return entry


@router.get("", response_model=List[WorkEntryResponse])
def list_work_entries(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _visible_entries(db, current_user.id).order_by(WorkEntry.start_time.desc()).all()


@router.get("/by-task/{task_id}", response_model=List[WorkEntryResponse])
def list_work_entries_for_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return (
        _visible_entries(db, current_user.id)
        .filter(WorkEntry.task_id == task_id)
        .order_by(WorkEntry.start_time.desc())
        .all()
    )


@router.get("/{entry_id}", response_model=WorkEntryResponse)
def get_work_entry(entry_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    entry = _visible_entries(db, current_user.id).filter(WorkEntry.id == entry_id).first()
    if entry is None:
        raise NotFound("Work entry not found.")
    return entry


@router.post("", response_model=WorkEntryResponse, status_code=status.HTTP_201_CREATED)
def create_work_entry(
    payload: WorkEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    start_time = _naive_utc(payload.start_time)
    end_time = _naive_utc(payload.end_time)
    _check_window(start_time, end_time)
    authorize_task(db, current_user.id, payload.task_id)

    entry = WorkEntry(
        task_id=payload.task_id,
        start_time=start_time,
        end_time=end_time,
        description=payload.description.strip(),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Work entry %s logged on task %s by user %s", entry.id, entry.task_id, current_user.id)
    return entry


@router.put("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_work_entry(
    entry_id: int,
    payload: WorkEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    entry = _load_entry(db, entry_id)
    start_time = _naive_utc(payload.start_time)
    end_time = _naive_utc(payload.end_time)
    _check_window(start_time, end_time)

    # Both the current and the target task must be reachable by the caller.
    authorize_task(db, current_user.id, entry.task_id)
    if payload.task_id != entry.task_id:
        authorize_task(db, current_user.id, payload.task_id)

    entry.task_id = payload.task_id
    entry.start_time = start_time
    entry.end_time = end_time
    entry.description = payload.description.strip()
    db.commit()
    logger.info("Work entry %s updated by user %s", entry_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_work_entry(entry_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    entry = _load_entry(db, entry_id)
    authorize_task(db, current_user.id, entry.task_id)

    db.delete(entry)
    db.commit()
    logger.info("Work entry %s deleted by user %s", entry_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

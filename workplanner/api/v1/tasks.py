"""Task endpoints, including drag-and-drop moves"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import TaskStatus, User
from workplanner.schemas import TaskCreate, TaskMove, TaskResponse, TaskUpdate
from workplanner.workflow.moves import MoveOrchestrator
from workplanner.workflow.tasks import TaskWorkflow

router = APIRouter()


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    project_id: Optional[int] = Query(None),
    sprint_id: Optional[int] = Query(None),
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskWorkflow(db).list_tasks(current_user.id, project_id, sprint_id, status_filter)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return TaskWorkflow(db).get_task(current_user.id, task_id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskWorkflow(db).create_task(
        current_user.id,
        project_id=payload.project_id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        sprint_id=payload.sprint_id,
        assignee_id=payload.assignee_id,
        order=payload.order,
    )


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    TaskWorkflow(db).update_task(
        current_user.id,
        task_id,
        title=payload.title,
        description=payload.description,
        status=payload.status,
        sprint_id=payload.sprint_id,
        assignee_id=payload.assignee_id,
        order=payload.order,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{task_id}/move", status_code=status.HTTP_204_NO_CONTENT)
def move_task(
    task_id: int,
    payload: TaskMove,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MoveOrchestrator(db).move_task(current_user.id, task_id, payload.sprint_id, payload.status, payload.new_order)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    TaskWorkflow(db).delete_task(current_user.id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Sprint endpoints, nested under a project"""
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import User
from workplanner.schemas import SprintCreate, SprintResponse, SprintUpdate
from workplanner.workflow.sprints import SprintStateMachine

router = APIRouter()


@router.get("/{project_id}/sprints", response_model=List[SprintResponse])
def list_sprints(
    project_id: int,
    include_archived: bool = Query(False),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SprintStateMachine(db).list_sprints(current_user.id, project_id, include_archived)


@router.get("/{project_id}/sprints/{sprint_id}", response_model=SprintResponse)
def get_sprint(
    project_id: int,
    sprint_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SprintStateMachine(db).get_sprint(current_user.id, project_id, sprint_id)


@router.post("/{project_id}/sprints", response_model=SprintResponse, status_code=status.HTTP_201_CREATED)
def create_sprint(
    project_id: int,
    payload: SprintCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SprintStateMachine(db).create(
        current_user.id,
        project_id,
        name=payload.name,
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_active=payload.is_active,
    )


@router.put("/{project_id}/sprints/{sprint_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_sprint(
    project_id: int,
    sprint_id: int,
    payload: SprintUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    SprintStateMachine(db).update(
        current_user.id,
        project_id,
        sprint_id,
        name=payload.name,
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_active=payload.is_active,
        is_archived=payload.is_archived,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/sprints/{sprint_id}/activate", status_code=status.HTTP_204_NO_CONTENT)
def activate_sprint(
    project_id: int,
    sprint_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    SprintStateMachine(db).activate(current_user.id, project_id, sprint_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/sprints/{sprint_id}/archive", status_code=status.HTTP_204_NO_CONTENT)
def archive_sprint(
    project_id: int,
    sprint_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    SprintStateMachine(db).archive(current_user.id, project_id, sprint_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

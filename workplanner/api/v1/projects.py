"""Project and member endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import User
from workplanner.schemas import (
    ProjectCreate,
    ProjectMemberAdd,
    ProjectMemberResponse,
    ProjectResponse,
    ProjectUpdate,
)
from workplanner.workflow.projects import ProjectService

router = APIRouter()


@router.get("", response_model=List[ProjectResponse])
def list_projects(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProjectService(db).list_projects(current_user.id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProjectService(db).create_project(current_user.id, payload.name, payload.enabled_statuses)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProjectService(db).get_project(current_user.id, project_id)


@router.put("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ProjectService(db).update_project(
        current_user.id,
        project_id,
        name=payload.name,
        is_archived=payload.is_archived,
        enabled_statuses=payload.enabled_statuses,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ProjectService(db).delete_project(current_user.id, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/members", response_model=List[ProjectMemberResponse])
def list_members(project_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProjectService(db).list_members(current_user.id, project_id)


@router.post("/{project_id}/members", response_model=ProjectMemberResponse, status_code=status.HTTP_201_CREATED)
def add_member(
    project_id: int,
    payload: ProjectMemberAdd,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProjectService(db).add_member(current_user.id, project_id, payload.email)


@router.delete("/{project_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    project_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ProjectService(db).remove_member(current_user.id, project_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

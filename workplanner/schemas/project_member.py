"""Schemas for project members"""
from datetime import datetime

from pydantic import BaseModel, EmailStr

from workplanner.models import ProjectRole
from workplanner.schemas.user import UserSummary


class ProjectMemberAdd(BaseModel):
    email: EmailStr


class ProjectMemberResponse(BaseModel):
    project_id: int
    user_id: int
    role: ProjectRole
    joined_at: datetime
    user: UserSummary

    class Config:
        from_attributes = True

"""User lookup"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import User
from workplanner.schemas import UserSummary
from workplanner.workflow.errors import NotFound, ValidationError

router = APIRouter()


@router.get("/by-email", response_model=UserSummary)
def get_user_by_email(
    email: str = Query(""),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    cleaned = email.strip().lower()
    if not cleaned:
        raise ValidationError("Email is required.")

    user = db.query(User).filter(User.email == cleaned).first()
    if user is None:
        raise NotFound("User not found.")
    return user

"""Request dependencies shared by the API routers."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from workplanner.auth import decode_access_token
from workplanner.database import get_db
from workplanner.models import User
from workplanner.workflow.errors import Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller from the bearer token."""
    if credentials is None:
        raise Unauthorized()

    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise Unauthorized("Invalid or expired token.")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthorized("Invalid or expired token.")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise Unauthorized("Invalid or expired token.")
    return user

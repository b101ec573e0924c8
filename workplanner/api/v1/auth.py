"""Registration, login and the current user"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from workplanner.auth import create_access_token, get_password_hash, verify_password
from workplanner.database import get_db
from workplanner.dependencies import get_current_user
from workplanner.models import User, UserRole
from workplanner.schemas import MessageResponse, Token, UserInfo, UserLogin, UserRegister, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        roles=[user.role.value],
        created_at=user.created_at,
    )


@router.post("/register", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    if payload.password != payload.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Passwords do not match")

    email = payload.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    user = User(
        email=email,
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        password_hash=get_password_hash(payload.password),
        role=UserRole.USER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token({"sub": str(user.id), "email": user.email, "role": user.role.value})
    logger.info("User %s logged in", user.id)
    return Token(access_token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    # Tokens are stateless; the client discards its copy.
    logger.info("User %s logged out", current_user.id)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserInfo)
def me(current_user: User = Depends(get_current_user)):
    return _user_info(current_user)

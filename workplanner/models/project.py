"""
Project Model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TypeDecorator

from workplanner.config import settings
from workplanner.database import Base
from workplanner.workflow.statuses import normalize_statuses, serialize_statuses


class StatusSet(TypeDecorator):
    """Stores a tuple of ``TaskStatus`` as canonical comma separated text."""

    impl = String(200)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return serialize_statuses(normalize_statuses(value))

    def process_result_value(self, value, dialect):
        return normalize_statuses(value)


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    enabled_statuses = Column(StatusSet(), default=lambda: normalize_statuses(settings.DEFAULT_ENABLED_STATUSES), nullable=False)
    version = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="owned_projects", foreign_keys=[owner_id])
    members = relationship("ProjectMember", back_populates="project", cascade="all, delete-orphan")
    sprints = relationship(
        "Sprint", back_populates="project", cascade="all, delete-orphan", order_by="Sprint.order"
    )
    tasks = relationship("TaskItem", back_populates="project")

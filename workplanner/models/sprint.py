"""
Sprint Model
"""
import enum

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from workplanner.database import Base


class SprintState(str, enum.Enum):
    INACTIVE = "Inactive"
    ACTIVE = "Active"
    ARCHIVED = "Archived"


class Sprint(Base):
    __tablename__ = "sprints"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="sprints")
    tasks = relationship("TaskItem", back_populates="sprint")

    @property
    def state(self) -> SprintState:
        if self.is_archived:
            return SprintState.ARCHIVED
        if self.is_active:
            return SprintState.ACTIVE
        return SprintState.INACTIVE

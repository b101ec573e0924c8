"""Work entry model for time logged against tasks"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from workplanner.database import Base


class WorkEntry(Base):
    __tablename__ = "work_entries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("task_items.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    description = Column(String(1000), default="", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    task = relationship("TaskItem", back_populates="work_entries")

    @property
    def duration(self):
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def hours(self):
        duration = self.duration
        return duration.total_seconds() / 3600 if duration is not None else None

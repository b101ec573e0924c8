"""
Project Member Model
"""
import enum

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from workplanner.database import Base


class ProjectRole(str, enum.Enum):
    OWNER = "Owner"
    MEMBER = "Member"


class ProjectMember(Base):
    __tablename__ = "project_members"

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    role = Column(
        SQLEnum(ProjectRole, name="project_role", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=ProjectRole.MEMBER,
        nullable=False,
    )
    joined_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="members")
    user = relationship("User", back_populates="project_memberships")

"""Projects and their member lists."""
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from workplanner.models import Project, ProjectMember, ProjectRole, User
from workplanner.workflow.access import authorize, visible_project
from workplanner.workflow.concurrency import run_in_transaction
from workplanner.workflow.errors import AlreadyMember, CannotRemoveOwner, NotFound, ValidationError
from workplanner.workflow.statuses import normalize_statuses

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Project name is required.")
    return cleaned


class ProjectService:
    def __init__(self, db: Session):
        self.db = db

    def list_projects(self, actor_id: int) -> List[Project]:
        return (
            self.db.query(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .filter(ProjectMember.user_id == actor_id)
            .order_by(Project.name.asc())
            .all()
        )

    def get_project(self, actor_id: int, project_id: int) -> Project:
        return visible_project(self.db, actor_id, project_id)

    def create_project(self, actor_id: int, name: str, enabled_statuses: Optional[Iterable] = None) -> Project:
        name = _clean_name(name)

        def attempt() -> Project:
            project = Project(name=name, owner_id=actor_id)
            if enabled_statuses is not None:
                project.enabled_statuses = normalize_statuses(enabled_statuses)
            project.members.append(ProjectMember(user_id=actor_id, role=ProjectRole.OWNER))
            self.db.add(project)
            self.db.flush()
            return project

        project = run_in_transaction(self.db, attempt)
        logger.info("Project %s created by user %s", project.id, actor_id)
        return project

    def update_project(
        self,
        actor_id: int,
        project_id: int,
        *,
        name: str,
        is_archived: bool = False,
        enabled_statuses: Optional[Iterable] = None,
    ) -> Project:
        project = authorize(self.db, actor_id, project_id, ProjectRole.OWNER)
        name = _clean_name(name)

        def attempt() -> Project:
            project.name = name
            project.is_archived = is_archived
            if enabled_statuses is not None:
                project.enabled_statuses = normalize_statuses(enabled_statuses)
            return project

        run_in_transaction(self.db, attempt)
        logger.info("Project %s updated by user %s (archived=%s)", project_id, actor_id, is_archived)
        return project

    def delete_project(self, actor_id: int, project_id: int) -> None:
        project = authorize(self.db, actor_id, project_id, ProjectRole.OWNER)
        run_in_transaction(self.db, lambda: self.db.delete(project))
        logger.info("Project %s deleted by user %s", project_id, actor_id)

    def list_members(self, actor_id: int, project_id: int) -> List[ProjectMember]:
        visible_project(self.db, actor_id, project_id)
        return (
            self.db.query(ProjectMember)
            .options(selectinload(ProjectMember.user))
            .filter(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at.asc(), ProjectMember.user_id.asc())
            .all()
        )

    def add_member(self, actor_id: int, project_id: int, email: str) -> ProjectMember:
        authorize(self.db, actor_id, project_id, ProjectRole.OWNER)

        cleaned = (email or "").strip()
        if not cleaned:
            raise ValidationError("Email is required.")

        user = self.db.query(User).filter(User.email == cleaned.lower()).first()
        if user is None:
            raise NotFound("User not found.")

        existing = (
            self.db.query(ProjectMember)
            .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user.id)
            .first()
        )
        if existing is not None:
            raise AlreadyMember()

        def attempt() -> ProjectMember:
            member = ProjectMember(project_id=project_id, user_id=user.id, role=ProjectRole.MEMBER)
            self.db.add(member)
            self.db.flush()
            return member

        member = run_in_transaction(self.db, attempt)
        logger.info("User %s added to project %s", user.id, project_id)
        return member

    def remove_member(self, actor_id: int, project_id: int, member_user_id: int) -> None:
        project = self.db.query(Project).filter(Project.id == project_id).first()
        if project is None:
            raise NotFound("Project not found.")
        # The owner stays a member no matter who asks.
        if member_user_id == project.owner_id:
            raise CannotRemoveOwner()

        authorize(self.db, actor_id, project_id, ProjectRole.OWNER)

        member = (
            self.db.query(ProjectMember)
            .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == member_user_id)
            .first()
        )
        if member is None:
            raise NotFound("Member not found.")
        if member.role == ProjectRole.OWNER:
            raise CannotRemoveOwner()

        run_in_transaction(self.db, lambda: self.db.delete(member))
        logger.info("User %s removed from project %s by user %s", member_user_id, project_id, actor_id)

"""Sprint activation and archival.

A sprint is Inactive, Active or Archived. Each project has at most one active
sprint, and archival is terminal. Every transition claims the owning
project's version first, so concurrent transitions in one project serialize:
the loser replays against fresh state or reports a conflict.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from workplanner.models import Project, Sprint
from workplanner.workflow.access import authorize, visible_project
from workplanner.workflow.concurrency import claim_version, run_in_transaction
from workplanner.workflow.errors import ArchivedSprintActivation, NotFound, ValidationError
from workplanner.workflow.ordering import next_sprint_order

logger = logging.getLogger(__name__)


def _validate_window(name: Optional[str], start_date: date, end_date: date) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Sprint name is required.")
    if end_date < start_date:
        raise ValidationError("EndDate must be after StartDate.")
    return cleaned


class SprintStateMachine:
    """Sprint transitions for one request, bound to its session."""

    def __init__(self, db: Session, retries: Optional[int] = None):
        self.db = db
        self.retries = retries

    def list_sprints(self, actor_id: int, project_id: int, include_archived: bool = False) -> List[Sprint]:
        visible_project(self.db, actor_id, project_id)
        query = self.db.query(Sprint).filter(Sprint.project_id == project_id)
        if not include_archived:
            query = query.filter(Sprint.is_archived.is_(False))
        return query.order_by(Sprint.order.asc(), Sprint.id.asc()).all()

    def get_sprint(self, actor_id: int, project_id: int, sprint_id: int) -> Sprint:
        visible_project(self.db, actor_id, project_id)
        return self._load(project_id, sprint_id)

    def create(
        self,
        actor_id: int,
        project_id: int,
        *,
        name: str,
        start_date: date,
        end_date: date,
        is_active: bool = False,
    ) -> Sprint:
        authorize(self.db, actor_id, project_id)
        name = _validate_window(name, start_date, end_date)

        def attempt() -> Sprint:
            self._claim_project(project_id)
            if is_active:
                self._deactivate_others(project_id)
            sprint = Sprint(
                project_id=project_id,
                name=name,
                start_date=start_date,
                end_date=end_date,
                is_active=is_active,
                is_archived=False,
                order=next_sprint_order(self.db, project_id),
            )
            self.db.add(sprint)
            self.db.flush()
            return sprint

        sprint = run_in_transaction(self.db, attempt, self.retries)
        logger.info("Sprint %s created in project %s (active=%s)", sprint.id, project_id, sprint.is_active)
        return sprint

    def activate(self, actor_id: int, project_id: int, sprint_id: int) -> Sprint:
        authorize(self.db, actor_id, project_id)

        def attempt() -> Sprint:
            sprint = self._load(project_id, sprint_id)
            if sprint.is_archived:
                raise ArchivedSprintActivation()
            self._claim_project(project_id)
            self._deactivate_others(project_id, keep_id=sprint.id)
            sprint.is_active = True
            return sprint

        sprint = run_in_transaction(self.db, attempt, self.retries)
        logger.info("Sprint %s activated in project %s by user %s", sprint_id, project_id, actor_id)
        return sprint

    def update(
        self,
        actor_id: int,
        project_id: int,
        sprint_id: int,
        *,
        name: str,
        start_date: date,
        end_date: date,
        is_active: bool = False,
        is_archived: bool = False,
    ) -> Sprint:
        authorize(self.db, actor_id, project_id)
        name = _validate_window(name, start_date, end_date)

        def attempt() -> Sprint:
            sprint = self._load(project_id, sprint_id)
            activating = is_active and not is_archived
            if activating and sprint.is_archived:
                raise ArchivedSprintActivation()

            self._claim_project(project_id)
            sprint.name = name
            sprint.start_date = start_date
            sprint.end_date = end_date

            if is_archived:
                sprint.is_archived = True
                sprint.is_active = False
            elif activating:
                self._deactivate_others(project_id, keep_id=sprint.id)
                sprint.is_active = True
            else:
                sprint.is_active = False
            return sprint

        sprint = run_in_transaction(self.db, attempt, self.retries)
        logger.info("Sprint %s updated in project %s (state=%s)", sprint_id, project_id, sprint.state.value)
        return sprint

    def archive(self, actor_id: int, project_id: int, sprint_id: int) -> Sprint:
        authorize(self.db, actor_id, project_id)

        def attempt() -> Sprint:
            sprint = self._load(project_id, sprint_id)
            if sprint.is_archived and not sprint.is_active:
                return sprint
            self._claim_project(project_id)
            sprint.is_archived = True
            sprint.is_active = False
            return sprint

        sprint = run_in_transaction(self.db, attempt, self.retries)
        logger.info("Sprint %s archived in project %s", sprint_id, project_id)
        return sprint

    def _load(self, project_id: int, sprint_id: int) -> Sprint:
        sprint = (
            self.db.query(Sprint)
            .filter(Sprint.id == sprint_id, Sprint.project_id == project_id)
            .first()
        )
        if sprint is None:
            raise NotFound("Sprint not found.")
        return sprint

    def _claim_project(self, project_id: int) -> None:
        project = self.db.query(Project).filter(Project.id == project_id).first()
        if project is None:
            raise NotFound("Project not found.")
        claim_version(self.db, Project, project.id, project.version)

    def _deactivate_others(self, project_id: int, keep_id: Optional[int] = None) -> None:
        query = self.db.query(Sprint).filter(Sprint.project_id == project_id, Sprint.is_active.is_(True))
        if keep_id is not None:
            query = query.filter(Sprint.id != keep_id)
        for sprint in query.all():
            sprint.is_active = False

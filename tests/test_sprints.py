from datetime import date

import pytest

import workplanner.workflow.sprints as sprints_module
from workplanner.models import Project, Sprint, SprintState
from workplanner.workflow.errors import (
    ArchivedSprintActivation,
    ConcurrencyConflict,
    Forbidden,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from workplanner.workflow.sprints import SprintStateMachine

from tests.conftest import make_project, make_sprint, make_user


def _active_ids(session, project_id):
    return [
        sprint.id
        for sprint in session.query(Sprint).filter(
            Sprint.project_id == project_id, Sprint.is_active.is_(True), Sprint.is_archived.is_(False)
        )
    ]


def test_create_validates_name_and_dates(db_session, owner, project):
    machine = SprintStateMachine(db_session)
    with pytest.raises(ValidationError) as exc:
        machine.create(owner.id, project.id, name="  ", start_date=date(2024, 1, 1), end_date=date(2024, 1, 5))
    assert exc.value.message == "Sprint name is required."

    with pytest.raises(ValidationError) as exc:
        machine.create(owner.id, project.id, name="S", start_date=date(2024, 1, 5), end_date=date(2024, 1, 1))
    assert exc.value.message == "EndDate must be after StartDate."

    sprint = machine.create(owner.id, project.id, name=" S1 ", start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))
    assert sprint.name == "S1"
    assert sprint.state == SprintState.INACTIVE


def test_creating_active_sprint_deactivates_previous(db_session, owner, project):
    first = make_sprint(db_session, owner, project, name="One", is_active=True)
    second = make_sprint(db_session, owner, project, name="Two", is_active=True)

    assert _active_ids(db_session, project.id) == [second.id]
    db_session.refresh(first)
    assert first.state == SprintState.INACTIVE


def test_activate_leaves_exactly_one_active(db_session, owner, member, project):
    first = make_sprint(db_session, owner, project, name="One", is_active=True)
    second = make_sprint(db_session, owner, project, name="Two")

    SprintStateMachine(db_session).activate(member.id, project.id, second.id)
    assert _active_ids(db_session, project.id) == [second.id]

    SprintStateMachine(db_session).activate(member.id, project.id, first.id)
    assert _active_ids(db_session, project.id) == [first.id]


def test_activate_rejects_archived_sprint(db_session, owner, project):
    sprint = make_sprint(db_session, owner, project)
    machine = SprintStateMachine(db_session)
    machine.archive(owner.id, project.id, sprint.id)

    with pytest.raises(ArchivedSprintActivation) as exc:
        machine.activate(owner.id, project.id, sprint.id)
    assert isinstance(exc.value, InvalidTransition)
    assert exc.value.status_code == 400
    assert exc.value.message == "Cannot activate archived sprint."


def test_activate_sprint_from_another_project_is_not_found(db_session, owner, project):
    other = make_project(db_session, owner, name="Other")
    foreign = make_sprint(db_session, owner, other)

    with pytest.raises(NotFound):
        SprintStateMachine(db_session).activate(owner.id, project.id, foreign.id)


def test_non_member_cannot_activate(db_session, owner, outsider, project):
    sprint = make_sprint(db_session, owner, project)
    with pytest.raises(Forbidden):
        SprintStateMachine(db_session).activate(outsider.id, project.id, sprint.id)


def test_archive_is_idempotent(db_session, owner, project):
    sprint = make_sprint(db_session, owner, project, is_active=True)
    machine = SprintStateMachine(db_session)

    machine.archive(owner.id, project.id, sprint.id)
    version_after_first = db_session.get(Project, project.id).version
    machine.archive(owner.id, project.id, sprint.id)

    db_session.refresh(sprint)
    assert sprint.is_archived is True
    assert sprint.is_active is False
    assert db_session.get(Project, project.id).version == version_after_first


def test_update_archive_wins_over_active_flag(db_session, owner, project):
    sprint = make_sprint(db_session, owner, project, is_active=True)
    updated = SprintStateMachine(db_session).update(
        owner.id,
        project.id,
        sprint.id,
        name="Renamed",
        start_date=sprint.start_date,
        end_date=sprint.end_date,
        is_active=True,
        is_archived=True,
    )
    assert updated.name == "Renamed"
    assert updated.state == SprintState.ARCHIVED
    assert _active_ids(db_session, project.id) == []


def test_update_cannot_unarchive_into_active(db_session, owner, project):
    sprint = make_sprint(db_session, owner, project)
    machine = SprintStateMachine(db_session)
    machine.archive(owner.id, project.id, sprint.id)

    with pytest.raises(ArchivedSprintActivation):
        machine.update(
            owner.id,
            project.id,
            sprint.id,
            name=sprint.name,
            start_date=sprint.start_date,
            end_date=sprint.end_date,
            is_active=True,
            is_archived=False,
        )

    # Archival is sticky even without activation.
    machine.update(
        owner.id,
        project.id,
        sprint.id,
        name="Still archived",
        start_date=sprint.start_date,
        end_date=sprint.end_date,
    )
    db_session.refresh(sprint)
    assert sprint.state == SprintState.ARCHIVED


def test_update_activation_switches_active_sprint(db_session, owner, project):
    first = make_sprint(db_session, owner, project, name="One", is_active=True)
    second = make_sprint(db_session, owner, project, name="Two")

    SprintStateMachine(db_session).update(
        owner.id,
        project.id,
        second.id,
        name="Two",
        start_date=second.start_date,
        end_date=second.end_date,
        is_active=True,
    )
    assert _active_ids(db_session, project.id) == [second.id]

    SprintStateMachine(db_session).update(
        owner.id,
        project.id,
        second.id,
        name="Two",
        start_date=second.start_date,
        end_date=second.end_date,
        is_active=False,
    )
    assert _active_ids(db_session, project.id) == []
    db_session.refresh(first)
    assert first.is_active is False


def test_list_hides_archived_unless_requested(db_session, owner, member, project):
    kept = make_sprint(db_session, owner, project, name="Kept")
    gone = make_sprint(db_session, owner, project, name="Gone")
    machine = SprintStateMachine(db_session)
    machine.archive(owner.id, project.id, gone.id)

    assert [s.id for s in machine.list_sprints(member.id, project.id)] == [kept.id]
    assert [s.id for s in machine.list_sprints(member.id, project.id, include_archived=True)] == [kept.id, gone.id]


def test_list_for_non_member_is_not_found(db_session, outsider, project):
    with pytest.raises(NotFound):
        SprintStateMachine(db_session).list_sprints(outsider.id, project.id)


def test_stale_activation_is_retried_and_one_sprint_wins(file_sessions, monkeypatch):
    session, rival = file_sessions
    owner = make_user(session, "race@example.com")
    project = make_project(session, owner)
    s1 = make_sprint(session, owner, project, name="S1")
    s2 = make_sprint(session, owner, project, name="S2")
    project_id, s1_id, s2_id, owner_id = project.id, s1.id, s2.id, owner.id

    real_claim = sprints_module.claim_version
    calls = []

    def racing_claim(db, model, row_id, expected_version):
        if not calls:
            calls.append(expected_version)
            # Another request activates S2 between our read and our write.
            SprintStateMachine(rival).activate(owner_id, project_id, s2_id)
        return real_claim(db, model, row_id, expected_version)

    monkeypatch.setattr(sprints_module, "claim_version", racing_claim)

    SprintStateMachine(session, retries=1).activate(owner_id, project_id, s1_id)

    session.expire_all()
    assert _active_ids(session, project_id) == [s1_id]
    assert session.get(Project, project_id).version == calls[0] + 2


def test_conflict_surfaces_after_bounded_retry(file_sessions, monkeypatch):
    session, rival = file_sessions
    owner = make_user(session, "race@example.com")
    project = make_project(session, owner)
    s1 = make_sprint(session, owner, project, name="S1")
    project_id, s1_id = project.id, s1.id

    attempts = []

    def always_stale(db, model, row_id, expected_version):
        attempts.append(expected_version)
        raise ConcurrencyConflict()

    monkeypatch.setattr(sprints_module, "claim_version", always_stale)

    with pytest.raises(ConcurrencyConflict):
        SprintStateMachine(session, retries=1).activate(owner.id, project_id, s1_id)

    assert len(attempts) == 2
    session.expire_all()
    assert _active_ids(session, project_id) == []

from workplanner.models import Project, TaskStatus
from workplanner.workflow.statuses import normalize_statuses, parse_status, serialize_statuses


def test_normalize_adds_required_and_sorts_canonically():
    result = normalize_statuses("review, done,refine")
    assert result == (
        TaskStatus.REFINE,
        TaskStatus.TODO,
        TaskStatus.IN_PROGRESS,
        TaskStatus.REVIEW,
        TaskStatus.DONE,
    )


def test_normalize_drops_backlog_unknown_and_duplicates():
    result = normalize_statuses(["Backlog", "Bogus", "Todo", "todo", TaskStatus.REVIEW])
    assert result == (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.REVIEW, TaskStatus.DONE)


def test_normalize_empty_input_gives_required_set():
    expected = (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE)
    assert normalize_statuses(None) == expected
    assert normalize_statuses("") == expected


def test_parse_status_is_case_insensitive():
    assert parse_status("inprogress") is TaskStatus.IN_PROGRESS
    assert parse_status("backlog") is None
    assert parse_status("nope") is None


def test_serialize_is_canonical():
    assert serialize_statuses([TaskStatus.DONE, TaskStatus.REFINE]) == "Refine,Todo,InProgress,Done"


def test_project_column_round_trips_typed_statuses(db_session, owner):
    project = Project(name="Typed", owner_id=owner.id, enabled_statuses=["review"])
    db_session.add(project)
    db_session.commit()
    db_session.expire_all()

    loaded = db_session.get(Project, project.id)
    assert loaded.enabled_statuses == (
        TaskStatus.TODO,
        TaskStatus.IN_PROGRESS,
        TaskStatus.REVIEW,
        TaskStatus.DONE,
    )


def test_project_defaults_to_required_statuses(db_session, owner):
    project = Project(name="Defaults", owner_id=owner.id)
    db_session.add(project)
    db_session.commit()
    db_session.expire_all()

    assert db_session.get(Project, project.id).enabled_statuses == (
        TaskStatus.TODO,
        TaskStatus.IN_PROGRESS,
        TaskStatus.DONE,
    )

from datetime import datetime, timedelta, timezone

import pytest

import workplanner.api.v1.work_entries as routes
from workplanner.schemas import WorkEntryCreate, WorkEntryUpdate
from workplanner.workflow.errors import Forbidden, NotFound, ValidationError
from workplanner.workflow.tasks import TaskWorkflow


@pytest.fixture
def task(db_session, owner, project):
    return TaskWorkflow(db_session).create_task(owner.id, project_id=project.id, title="Logged task")


def _log(db_session, user, task, start, hours=1.0, description=""):
    payload = WorkEntryCreate(
        task_id=task.id,
        start_time=start,
        end_time=start + timedelta(hours=hours) if hours is not None else None,
        description=description,
    )
    return routes.create_work_entry(payload, user, db_session)


def test_create_and_read_entries(db_session, member, task):
    start = datetime(2024, 5, 6, 9, 0)
    entry = _log(db_session, member, task, start, hours=1.5, description=" pairing ")

    assert entry.description == "pairing"
    assert entry.hours == pytest.approx(1.5)
    assert routes.get_work_entry(entry.id, member, db_session).id == entry.id
    assert [e.id for e in routes.list_work_entries_for_task(task.id, member, db_session)] == [entry.id]


def test_running_entry_has_no_hours(db_session, member, task):
    entry = _log(db_session, member, task, datetime(2024, 5, 6, 9, 0), hours=None)
    assert entry.end_time is None
    assert entry.hours is None


def test_list_is_newest_first(db_session, member, task):
    older = _log(db_session, member, task, datetime(2024, 5, 6, 9, 0))
    newer = _log(db_session, member, task, datetime(2024, 5, 7, 9, 0))
    assert [e.id for e in routes.list_work_entries(member, db_session)] == [newer.id, older.id]


def test_end_before_start_is_rejected(db_session, member, task):
    with pytest.raises(ValidationError):
        _log(db_session, member, task, datetime(2024, 5, 6, 9, 0), hours=-1)


def test_aware_timestamps_are_stored_as_utc(db_session, member, task):
    start = datetime(2024, 5, 6, 11, 0, tzinfo=timezone(timedelta(hours=2)))
    entry = _log(db_session, member, task, start)
    assert entry.start_time == datetime(2024, 5, 6, 9, 0)


def test_outsider_cannot_log_or_see(db_session, member, outsider, task):
    with pytest.raises(Forbidden):
        _log(db_session, outsider, task, datetime(2024, 5, 6, 9, 0))

    entry = _log(db_session, member, task, datetime(2024, 5, 6, 9, 0))
    assert routes.list_work_entries(outsider, db_session) == []
    with pytest.raises(NotFound):
        routes.get_work_entry(entry.id, outsider, db_session)
    with pytest.raises(Forbidden):
        routes.delete_work_entry(entry.id, outsider, db_session)


def test_update_and_delete(db_session, member, task):
    entry = _log(db_session, member, task, datetime(2024, 5, 6, 9, 0))
    payload = WorkEntryUpdate(
        task_id=task.id,
        start_time=datetime(2024, 5, 6, 8, 0),
        end_time=datetime(2024, 5, 6, 12, 0),
        description="longer",
    )
    response = routes.update_work_entry(entry.id, payload, member, db_session)
    assert response.status_code == 204

    refreshed = routes.get_work_entry(entry.id, member, db_session)
    assert refreshed.hours == pytest.approx(4.0)
    assert refreshed.description == "longer"

    routes.delete_work_entry(entry.id, member, db_session)
    with pytest.raises(NotFound):
        routes.get_work_entry(entry.id, member, db_session)

from datetime import date, datetime, timedelta

import pytest

import workplanner.api.v1.summaries as routes
from workplanner.models import WorkEntry
from workplanner.workflow.tasks import TaskWorkflow

from tests.conftest import make_project


def _entry(session, task, start, hours):
    end = start + timedelta(hours=hours) if hours is not None else None
    session.add(WorkEntry(task_id=task.id, start_time=start, end_time=end))
    session.commit()


def test_week_start_is_most_recent_sunday():
    assert routes.week_start_for(date(2024, 5, 8)) == date(2024, 5, 5)  # Wednesday
    assert routes.week_start_for(date(2024, 5, 5)) == date(2024, 5, 5)  # Sunday
    assert routes.week_start_for(date(2024, 5, 11)) == date(2024, 5, 5)  # Saturday


def test_daily_summary_groups_finished_entries_by_task(db_session, owner, member, outsider, project):
    workflow = TaskWorkflow(db_session)
    write = workflow.create_task(owner.id, project_id=project.id, title="Write")
    review = workflow.create_task(owner.id, project_id=project.id, title="Review")
    hidden_project = make_project(db_session, outsider, name="Hidden")
    hidden = workflow.create_task(outsider.id, project_id=hidden_project.id, title="Hidden")

    _entry(db_session, write, datetime(2024, 5, 6, 9), 1.0)
    _entry(db_session, write, datetime(2024, 5, 6, 13), 0.5)
    _entry(db_session, review, datetime(2024, 5, 6, 15), 2.0)
    _entry(db_session, review, datetime(2024, 5, 6, 17), None)  # still running
    _entry(db_session, review, datetime(2024, 5, 7, 9), 3.0)  # next day
    _entry(db_session, hidden, datetime(2024, 5, 6, 9), 8.0)

    summary = {item.task_id: item for item in routes.daily_summary(date(2024, 5, 6), member, db_session)}

    assert set(summary) == {write.id, review.id}
    assert summary[write.id].task_title == "Write"
    assert summary[write.id].total_hours == pytest.approx(1.5)
    assert summary[write.id].entry_count == 2
    assert summary[review.id].total_hours == pytest.approx(2.0)
    assert summary[review.id].entry_count == 1


def test_weekly_summary_totals(db_session, owner, project):
    task = TaskWorkflow(db_session).create_task(owner.id, project_id=project.id, title="Build")
    _entry(db_session, task, datetime(2024, 5, 5, 9), 2.0)
    _entry(db_session, task, datetime(2024, 5, 7, 9), 1.0)
    _entry(db_session, task, datetime(2024, 5, 7, 14), 1.0)
    _entry(db_session, task, datetime(2024, 5, 12, 9), 5.0)  # following week

    summary = routes.weekly_summary(date(2024, 5, 5), owner, db_session)

    assert summary.week_start == date(2024, 5, 5)
    assert summary.week_end == date(2024, 5, 11)
    assert summary.total_hours == pytest.approx(4.0)
    assert [(d.date, d.hours) for d in summary.daily_hours] == [
        (date(2024, 5, 5), pytest.approx(2.0)),
        (date(2024, 5, 7), pytest.approx(2.0)),
    ]
    assert len(summary.task_summaries) == 1
    assert summary.task_summaries[0].total_hours == pytest.approx(4.0)


def test_empty_week(db_session, owner):
    summary = routes.weekly_summary(date(2024, 1, 7), owner, db_session)
    assert summary.total_hours == 0
    assert summary.daily_hours == []
    assert summary.task_summaries == []

from unittest.mock import MagicMock

import pytest

from workplanner.models import Project, TaskItem
from workplanner.workflow.concurrency import claim_version, run_in_transaction
from workplanner.workflow.errors import ConcurrencyConflict, NotFound

from tests.conftest import make_project


def test_claim_version_bumps_matching_version(db_session, owner):
    project = make_project(db_session, owner)
    current = project.version

    assert claim_version(db_session, Project, project.id, current) == current + 1
    db_session.commit()
    assert db_session.get(Project, project.id).version == current + 1


def test_claim_version_rejects_stale_version(db_session, owner):
    project = make_project(db_session, owner)
    stale = project.version - 1

    with pytest.raises(ConcurrencyConflict):
        claim_version(db_session, Project, project.id, stale)


def test_claim_version_on_missing_row_conflicts(db_session):
    with pytest.raises(ConcurrencyConflict):
        claim_version(db_session, TaskItem, 999, 1)


def test_run_in_transaction_retries_once_then_commits():
    db = MagicMock()
    outcomes = [ConcurrencyConflict(), "done"]

    def operation():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    assert run_in_transaction(db, operation, retries=1) == "done"
    assert db.rollback.call_count == 1
    assert db.commit.call_count == 1


def test_run_in_transaction_gives_up_after_retries():
    db = MagicMock()
    operation = MagicMock(side_effect=ConcurrencyConflict())

    with pytest.raises(ConcurrencyConflict):
        run_in_transaction(db, operation, retries=1)
    assert operation.call_count == 2
    assert db.rollback.call_count == 2
    db.commit.assert_not_called()


def test_run_in_transaction_does_not_retry_other_errors():
    db = MagicMock()
    operation = MagicMock(side_effect=NotFound())

    with pytest.raises(NotFound):
        run_in_transaction(db, operation, retries=3)
    assert operation.call_count == 1
    db.rollback.assert_called_once()

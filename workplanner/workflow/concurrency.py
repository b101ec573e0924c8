"""Optimistic concurrency for workflow writes.

Rows that take part in multi-step transitions carry an integer ``version``.
A writer claims the row with a compare-and-swap ``UPDATE`` before touching
anything else; losing the race raises :class:`ConcurrencyConflict` and the
whole read-modify-write is replayed at most ``retries`` more times.
"""
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy import update
from sqlalchemy.orm import Session

from workplanner.config import settings
from workplanner.workflow.errors import ConcurrencyConflict

logger = logging.getLogger(__name__)

T = TypeVar("T")


def claim_version(db: Session, model, row_id: int, expected_version: int) -> int:
    """Bump ``model.version`` from ``expected_version`` for row ``row_id``.

    Returns the new version. Raises :class:`ConcurrencyConflict` when another
    transaction already moved the version on (or the row vanished).
    """
    stmt = (
        update(model)
        .where(model.id == row_id, model.version == expected_version)
        .values(version=expected_version + 1)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    if result.rowcount != 1:
        raise ConcurrencyConflict(
            f"{model.__name__} {row_id} changed concurrently (expected version {expected_version})."
        )
    return expected_version + 1


def run_in_transaction(db: Session, operation: Callable[[], T], retries: Optional[int] = None) -> T:
    """Run ``operation`` and commit, replaying it on optimistic conflicts.

    Any exception rolls the session back so no partial write is committed.
    After ``retries`` replays a further conflict is raised to the caller.
    """
    if retries is None:
        retries = settings.CONCURRENCY_RETRIES

    attempt = 0
    while True:
        try:
            result = operation()
            db.commit()
            return result
        except ConcurrencyConflict:
            db.rollback()
            if attempt >= retries:
                logger.warning("Giving up after %d conflicting attempt(s)", attempt + 1)
                raise
            attempt += 1
            logger.info("Concurrency conflict, retrying (attempt %d of %d)", attempt, retries)
        except Exception:
            db.rollback()
            raise

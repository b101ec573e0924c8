"""Per-project enabled status sets.

Projects store the statuses shown on their board as a comma separated string.
That string is parsed only here; everything past the database boundary works
with a tuple of :class:`TaskStatus` in canonical board order.
"""
import enum
from typing import Iterable, Tuple, Union


class TaskStatus(str, enum.Enum):
    BACKLOG = "Backlog"
    REFINE = "Refine"
    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    REVIEW = "Review"
    DONE = "Done"


CANONICAL_ORDER: Tuple[TaskStatus, ...] = (
    TaskStatus.REFINE,
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.REVIEW,
    TaskStatus.DONE,
)

REQUIRED_STATUSES = frozenset({TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE})

_BY_NAME = {status.value.lower(): status for status in CANONICAL_ORDER}


def parse_status(raw: str):
    """Return the board status named ``raw`` (case-insensitive) or ``None``."""
    return _BY_NAME.get((raw or "").strip().lower())


def normalize_statuses(statuses: Union[str, Iterable, None]) -> Tuple[TaskStatus, ...]:
    """Normalize a status selection to the canonical enabled-status tuple.

    Accepts either the stored comma separated form or an iterable of
    statuses/strings. Unknown names and ``Backlog`` are dropped, ``Todo``,
    ``InProgress`` and ``Done`` are always present.
    """
    if statuses is None:
        items = []
    elif isinstance(statuses, str):
        items = statuses.split(",")
    else:
        items = list(statuses)

    selected = set(REQUIRED_STATUSES)
    for item in items:
        value = item.value if isinstance(item, TaskStatus) else str(item)
        status = parse_status(value)
        if status is not None:
            selected.add(status)

    return tuple(status for status in CANONICAL_ORDER if status in selected)


def serialize_statuses(statuses: Iterable[TaskStatus]) -> str:
    return ",".join(status.value for status in normalize_statuses(statuses))

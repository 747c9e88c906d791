from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from countdown_tasks.config import INVALID_DEADLINE_LABEL
from countdown_tasks.domain.deadline_math import format_deadline, format_remaining, parse_deadline, remaining
from countdown_tasks.domain.errors import ValidationError
from countdown_tasks.domain.models import RowState, SortDirection, SortKey, Task, TaskRow
from countdown_tasks.domain.ordering import sort_tasks


def to_row(task: Task, now: datetime) -> TaskRow:
    try:
        deadline = parse_deadline(task.deadline)
    except ValidationError:
        state = RowState.COMPLETED if task.completed else RowState.PENDING
        return TaskRow(task.id, task.text, task.completed, task.deadline, INVALID_DEADLINE_LABEL, state)

    left = remaining(deadline, now)
    remaining_label = format_remaining(left)
    if task.completed:
        state = RowState.COMPLETED
    elif left <= timedelta(0):
        state = RowState.EXPIRED
    else:
        state = RowState.PENDING
    return TaskRow(task.id, task.text, task.completed, format_deadline(deadline), remaining_label, state)


def build_rows(
    tasks: Iterable[Task],
    sort_key: SortKey,
    direction: SortDirection,
    now: datetime,
) -> list[TaskRow]:
    """Order ``tasks`` and render each one against the same clock reading."""
    return [to_row(task, now) for task in sort_tasks(tasks, sort_key, direction, now)]

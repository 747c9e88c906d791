"""Deterministic ordering of task collections."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from functools import cmp_to_key
from typing import Any

from PyQt6.QtCore import QCollator, Qt

from countdown_tasks.domain.deadline_math import parse_deadline, remaining
from countdown_tasks.domain.errors import ValidationError
from countdown_tasks.domain.models import SortDirection, SortKey, Task


def _deadline_or_none(task: Task) -> datetime | None:
    try:
        return parse_deadline(task.deadline)
    except ValidationError:
        return None


def _label_key():
    """Collation key for labels in the user's locale, ignoring case."""
    collator = QCollator()
    collator.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
    return cmp_to_key(collator.compare)


def _sort_value(task: Task, key: SortKey, now: datetime, label_key=None) -> Any:
    if key == SortKey.LABEL:
        return label_key(task.text)
    deadline = _deadline_or_none(task)
    if deadline is None:
        return None
    if key == SortKey.DEADLINE:
        return deadline
    return remaining(deadline, now)


def sort_tasks(
    tasks: Iterable[Task],
    key: SortKey,
    direction: SortDirection,
    now: datetime,
) -> list[Task]:
    """Return a new list of ``tasks`` ordered by ``key`` and ``direction``.

    ``sorted`` is stable, also with ``reverse=True``, so tasks that compare
    equal keep their incoming relative order in both directions. ``now`` is
    read once per pass for remaining-time ordering. Tasks whose deadline
    cannot be parsed go last regardless of direction.
    """
    label_key = _label_key() if key == SortKey.LABEL else None
    decorated = [(task, _sort_value(task, key, now, label_key)) for task in tasks]
    comparable = [item for item in decorated if item[1] is not None]
    unparseable = [task for task, value in decorated if value is None]

    ordered = sorted(
        comparable,
        key=lambda item: item[1],
        reverse=direction == SortDirection.DESCENDING,
    )
    return [task for task, _ in ordered] + unparseable


def next_sort(
    current_key: SortKey,
    current_direction: SortDirection,
    clicked_key: SortKey,
) -> tuple[SortKey, SortDirection]:
    """Resolve a click on a sortable column header."""
    if clicked_key == current_key:
        return current_key, current_direction.flipped()
    return clicked_key, SortDirection.ASCENDING

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SortKey(str, Enum):
    LABEL = "label"
    DEADLINE = "deadline"
    REMAINING = "remaining"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


class RowState(str, Enum):
    COMPLETED = "completed"
    EXPIRED = "expired"
    PENDING = "pending"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


DEFAULT_SORT_KEY = SortKey.REMAINING
DEFAULT_SORT_DIRECTION = SortDirection.ASCENDING


@dataclass(slots=True)
class Task:
    id: str
    text: str
    deadline: str
    completed: bool = False

    def to_record(self) -> dict:
        return {"text": self.text, "completed": self.completed, "deadline": self.deadline}


@dataclass(slots=True, frozen=True)
class TaskRow:
    """One rendered line of the task table."""

    id: str
    text: str
    completed: bool
    deadline_label: str
    remaining_label: str
    state: RowState


@dataclass(slots=True, frozen=True)
class Notification:
    level: NotificationLevel
    message: str
    task_id: str | None = None

    @property
    def is_error(self) -> bool:
        return self.level == NotificationLevel.ERROR

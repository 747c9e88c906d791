"""Contract between the engine and whatever asks the user for task fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from countdown_tasks.domain.deadline_math import parse_deadline
from countdown_tasks.domain.errors import ValidationError


@dataclass(slots=True, frozen=True)
class Submitted:
    text: str
    deadline: str


@dataclass(slots=True, frozen=True)
class Cancelled:
    pass


PromptResult = Union[Submitted, Cancelled]


class InputSurface(Protocol):
    def prompt_task(self, title: str, initial: Submitted | None = None) -> PromptResult:
        ...

    def confirm(self, title: str, message: str) -> bool:
        ...


def validate_submission(text: str, deadline: str) -> Submitted:
    """Normalize prompt values, raising ``ValidationError`` when a field is unusable."""
    label = (text or "").strip()
    if not label:
        raise ValidationError("Task name is required.")

    raw_deadline = (deadline or "").strip()
    parse_deadline(raw_deadline)
    return Submitted(text=label, deadline=raw_deadline)

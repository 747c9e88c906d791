from __future__ import annotations

from typing import Any, Protocol

from countdown_tasks.domain.models import Task

UPDATABLE_FIELDS = frozenset({"text", "deadline", "completed"})


class TaskStore(Protocol):
    """Remote persistence for the ``tasks`` collection.

    Every failure is raised as ``StoreError`` (``NotFoundError`` for an
    absent id). Implementations never retry on their own.
    """

    def list_all(self) -> list[Task]:
        ...

    def create(self, text: str, deadline: str) -> str:
        ...

    def update(self, task_id: str, fields: dict[str, Any]) -> None:
        ...

    def delete(self, task_id: str) -> None:
        ...


def check_update_fields(fields: dict[str, Any]) -> dict[str, Any]:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unsupported task fields: {', '.join(sorted(unknown))}")
    return dict(fields)

from __future__ import annotations

import itertools
import logging
from typing import Any

from countdown_tasks.application.task_store import check_update_fields
from countdown_tasks.domain.errors import NotFoundError, StoreError
from countdown_tasks.domain.models import Task

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """Dict-backed task store used for tests and as a session-only fallback.

    Records keep insertion order. ``fail_next`` arms a one-shot failure for a
    named operation so callers can exercise their error paths.
    """

    def __init__(self, tasks: list[Task] | None = None, *, id_prefix: str = "task-"):
        self._records: dict[str, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._id_prefix = id_prefix
        self._pending_failures: dict[str, StoreError] = {}
        for task in tasks or []:
            self._records[task.id] = task.to_record()

    def fail_next(self, operation: str, error: StoreError | None = None) -> None:
        if operation not in {"list_all", "create", "update", "delete"}:
            raise ValueError(f"Unknown store operation: {operation}")
        self._pending_failures[operation] = error or StoreError(f"Simulated {operation} failure")

    def _raise_if_armed(self, operation: str) -> None:
        error = self._pending_failures.pop(operation, None)
        if error is not None:
            raise error

    def record(self, task_id: str) -> dict[str, Any] | None:
        record = self._records.get(task_id)
        return dict(record) if record is not None else None

    def list_all(self) -> list[Task]:
        self._raise_if_armed("list_all")
        return [Task(id=task_id, **record) for task_id, record in self._records.items()]

    def create(self, text: str, deadline: str) -> str:
        self._raise_if_armed("create")
        task_id = f"{self._id_prefix}{next(self._ids)}"
        while task_id in self._records:
            task_id = f"{self._id_prefix}{next(self._ids)}"
        self._records[task_id] = {"text": text, "completed": False, "deadline": deadline}
        logger.debug("Created in-memory task id=%s", task_id)
        return task_id

    def update(self, task_id: str, fields: dict[str, Any]) -> None:
        self._raise_if_armed("update")
        patch = check_update_fields(fields)
        if task_id not in self._records:
            raise NotFoundError(f"Task {task_id} not found", task_id=task_id)
        self._records[task_id].update(patch)

    def delete(self, task_id: str) -> None:
        self._raise_if_armed("delete")
        if task_id not in self._records:
            raise NotFoundError(f"Task {task_id} not found", task_id=task_id)
        del self._records[task_id]

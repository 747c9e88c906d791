"""Owner of the in-memory task collection and its reconciliation with the store."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from PyQt6.QtCore import QObject, pyqtSignal

from countdown_tasks.application.task_store import TaskStore
from countdown_tasks.domain.errors import StoreError
from countdown_tasks.domain.models import Notification, NotificationLevel, SortDirection, SortKey, Task
from countdown_tasks.domain.ordering import sort_tasks


logger = logging.getLogger(__name__)


class TaskCollectionController(QObject):
    """Single writer of the local task list.

    ``add``, ``edit`` and ``delete`` change local state only after the store
    confirms. ``toggle_complete`` flips locally first and keeps the flip when
    the store call fails, so local and remote may diverge for that field.
    Store failures never propagate; they are logged and emitted as
    ``notified`` errors.
    """

    tasks_changed = pyqtSignal()
    notified = pyqtSignal(object)  # Notification

    def __init__(self, store: TaskStore, parent: QObject | None = None):
        super().__init__(parent)
        self._store = store
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(replace(task) for task in self._tasks)

    def get(self, task_id: str) -> Task | None:
        task = self._find(task_id)
        return replace(task) if task is not None else None

    def _find(self, task_id: str) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def load(self) -> bool:
        try:
            loaded = self._store.list_all()
        except StoreError as exc:
            self._report_failure("Failed to load tasks", exc)
            return False

        unique: dict[str, Task] = {}
        for task in loaded:
            if not task.id:
                logger.warning("Skipping stored task without an id.")
                continue
            if task.id in unique:
                logger.warning("Skipping duplicate stored task id=%s", task.id)
                continue
            unique[task.id] = task

        self._tasks = list(unique.values())
        logger.info("Loaded %d tasks.", len(self._tasks))
        self.tasks_changed.emit()
        return True

    def add(self, text: str, deadline: str) -> Task | None:
        try:
            task_id = self._store.create(text, deadline)
        except StoreError as exc:
            self._report_failure("Failed to add task", exc)
            return None

        task = Task(id=task_id, text=text, deadline=deadline, completed=False)
        self._tasks.append(task)
        self.tasks_changed.emit()
        self._report_success(f"Added \"{text}\".", task_id)
        return replace(task)

    def edit(self, task_id: str, text: str, deadline: str) -> bool:
        try:
            self._store.update(task_id, {"text": text, "deadline": deadline})
        except StoreError as exc:
            self._report_failure("Failed to update task", exc, task_id)
            return False

        task = self._find(task_id)
        if task is None:
            logger.warning("Task id=%s was updated remotely but is not loaded locally.", task_id)
        else:
            task.text = text
            task.deadline = deadline
            self.tasks_changed.emit()
        self._report_success(f"Updated \"{text}\".", task_id)
        return True

    def toggle_complete(self, task_id: str) -> bool:
        task = self._find(task_id)
        if task is None:
            self._notify(NotificationLevel.ERROR, f"Task {task_id} is not in the list.", task_id)
            return False

        task.completed = not task.completed
        self.tasks_changed.emit()

        try:
            self._store.update(task_id, {"completed": task.completed})
        except StoreError as exc:
            # The local flip stays; there is no compensating rollback.
            self._report_failure("Failed to save completion state", exc, task_id)
            return False

        state = "completed" if task.completed else "reopened"
        self._report_success(f"Marked \"{task.text}\" as {state}.", task_id)
        return True

    def delete(self, task_id: str) -> bool:
        try:
            self._store.delete(task_id)
        except StoreError as exc:
            self._report_failure("Failed to delete task", exc, task_id)
            return False

        before = len(self._tasks)
        self._tasks = [task for task in self._tasks if task.id != task_id]
        if len(self._tasks) != before:
            self.tasks_changed.emit()
        self._report_success("Task deleted.", task_id)
        return True

    def current_view(self, sort_key: SortKey, direction: SortDirection, now: datetime) -> list[Task]:
        return [replace(task) for task in sort_tasks(self._tasks, sort_key, direction, now)]

    def _report_failure(self, action: str, exc: StoreError, task_id: str | None = None) -> None:
        logger.error("%s: %s", action, exc)
        self._notify(NotificationLevel.ERROR, f"{action}: {exc}", task_id)

    def _report_success(self, message: str, task_id: str | None = None) -> None:
        logger.info(message)
        self._notify(NotificationLevel.SUCCESS, message, task_id)

    def _notify(self, level: NotificationLevel, message: str, task_id: str | None) -> None:
        self.notified.emit(Notification(level=level, message=message, task_id=task_id))

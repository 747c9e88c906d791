# tests/conftest.py

from __future__ import annotations

from datetime import datetime

import pytest
from PyQt6.QtCore import QCoreApplication

from countdown_tasks.application.controller import TaskCollectionController
from countdown_tasks.domain.models import Task

from .fakes import RecordingStore


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """QObject signals and QTimer need a core application; no display is required."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def now() -> datetime:
    return datetime(2025, 1, 1, 9, 0, 0)


@pytest.fixture()
def seeded_tasks() -> list[Task]:
    return [
        Task(id="a", text="Alpha", deadline="2025-01-01T12:00"),
        Task(id="b", text="Bravo", deadline="2025-01-01T10:00"),
        Task(id="c", text="Charlie", deadline="2025-01-02T08:00", completed=True),
    ]


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def controller(store: RecordingStore) -> TaskCollectionController:
    return TaskCollectionController(store)


@pytest.fixture()
def notifications(controller: TaskCollectionController) -> list:
    received: list = []
    controller.notified.connect(received.append)
    return received

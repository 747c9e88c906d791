"""
Countdown Tasks: entry point.
Deadline-driven task list synced with a Firestore "tasks" collection.
"""

from __future__ import annotations

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from countdown_tasks.application.controller import TaskCollectionController
from countdown_tasks.application.task_store import TaskStore
from countdown_tasks.config import DATA_DIR, load_firestore_settings
from countdown_tasks.domain.errors import AuthRequiredError
from countdown_tasks.infrastructure.google.auth_service import GoogleAuthService
from countdown_tasks.infrastructure.google.firestore_gateway import FirestoreTaskGateway
from countdown_tasks.infrastructure.memory.in_memory_store import InMemoryTaskStore
from countdown_tasks.ui import MainWindow


logger = logging.getLogger(__name__)


def setup_logging() -> None:
    os.makedirs(DATA_DIR, exist_ok=True)
    log_file = os.path.join(DATA_DIR, "app.log")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )


def create_store() -> TaskStore:
    settings = load_firestore_settings()
    auth = GoogleAuthService()
    if settings is None or not auth.is_available():
        logger.warning("Firestore is not configured; tasks will only live for this session.")
        return InMemoryTaskStore()

    try:
        authenticated = auth.authenticate()
    except AuthRequiredError:
        logger.info("Stored token is unusable; starting interactive sign-in.")
        authenticated = auth.run_interactive_auth()

    if not authenticated:
        logger.warning("Firestore sign-in failed; tasks will only live for this session.")
        return InMemoryTaskStore()
    return FirestoreTaskGateway(settings, auth_service=auth)


def main() -> None:
    setup_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Countdown Tasks")

    controller = TaskCollectionController(create_store())
    window = MainWindow(controller)
    window.show()
    window.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

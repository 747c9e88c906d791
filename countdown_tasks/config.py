"""Application-wide constants and Firestore connection settings."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

from countdown_tasks.utils import get_base_path

logger = logging.getLogger(__name__)

BASE_DIR = get_base_path()
DATA_DIR = os.path.join(BASE_DIR, "data")
CREDENTIALS_FILE = os.path.join(BASE_DIR, "credentials.json")
TOKEN_FILE = os.path.join(BASE_DIR, "token.json")
FIREBASE_CONFIG_FILE = os.path.join(BASE_DIR, "firebase.json")

COLLECTION_NAME = "tasks"
DEFAULT_DATABASE_ID = "(default)"

TICK_INTERVAL_MS = 1_000
REQUEST_TIMEOUT_SECONDS = 10.0
NOTIFICATION_TIMEOUT_MS = 3_000
LIST_PAGE_SIZE = 300

DEADLINE_INPUT_FORMAT = "%Y-%m-%dT%H:%M"
DEADLINE_LABEL_FORMAT = "%Y-%m-%d %H:%M"
EXPIRED_LABEL = "Time's up!"
INVALID_DEADLINE_LABEL = "Invalid deadline"

PROJECT_ID_ENV = "COUNTDOWN_TASKS_PROJECT_ID"
DATABASE_ID_ENV = "COUNTDOWN_TASKS_DATABASE_ID"


@dataclass(slots=True, frozen=True)
class FirestoreSettings:
    project_id: str
    database_id: str = DEFAULT_DATABASE_ID

    @property
    def documents_root(self) -> str:
        return f"projects/{self.project_id}/databases/{self.database_id}/documents"


def load_firestore_settings(path: str | None = None) -> FirestoreSettings | None:
    """Read the Firebase project settings.

    ``firebase.json`` mirrors the web SDK config (``projectId`` and an optional
    ``databaseId``). Environment variables take precedence over the file.
    Returns ``None`` when no project is configured.
    """
    path = path or FIREBASE_CONFIG_FILE
    payload: dict = {}
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as file:
                loaded = json.load(file)
            if isinstance(loaded, dict):
                payload = loaded
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to read Firebase settings from %s.", path)

    project_id = os.environ.get(PROJECT_ID_ENV) or payload.get("projectId") or ""
    database_id = os.environ.get(DATABASE_ID_ENV) or payload.get("databaseId") or DEFAULT_DATABASE_ID
    if not project_id:
        return None
    return FirestoreSettings(project_id=str(project_id), database_id=str(database_id))

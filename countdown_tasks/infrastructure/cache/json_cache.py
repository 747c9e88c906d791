from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone

from countdown_tasks.config import DATA_DIR

logger = logging.getLogger(__name__)


class JsonCache:
    """Named JSON documents under ``data/cache``, wrapped with a save timestamp."""

    def __init__(self, cache_dir: str | None = None):
        self.cache_dir = cache_dir or os.path.join(DATA_DIR, "cache")
        os.makedirs(self.cache_dir, exist_ok=True)

    def save(self, name: str, payload: dict) -> None:
        wrapper = {
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "payload": payload,
        }
        with open(self._path(name), "w", encoding="utf-8") as file:
            json.dump(wrapper, file, ensure_ascii=False, indent=2)

    def load(self, name: str) -> dict | None:
        path = self._path(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as file:
                return json.load(file)
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable cache file %s", path)
            return None

    def _path(self, name: str) -> str:
        safe_name = name.replace("/", "_").replace("\\", "_")
        return os.path.join(self.cache_dir, f"{safe_name}.json")

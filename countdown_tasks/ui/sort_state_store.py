"""Persisted sort choice for the task table."""

from __future__ import annotations

from dataclasses import dataclass

from countdown_tasks.domain.models import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_KEY, SortDirection, SortKey
from countdown_tasks.infrastructure.cache.json_cache import JsonCache


@dataclass(slots=True)
class SortState:
    sort_key: SortKey = DEFAULT_SORT_KEY
    direction: SortDirection = DEFAULT_SORT_DIRECTION


class SortStateStore:
    """Load/save the active sort key and direction via JSON cache."""

    def __init__(self, cache: JsonCache | None = None):
        self._cache = cache or JsonCache()

    def load(self) -> SortState:
        wrapper = self._cache.load("sort_state")
        if not isinstance(wrapper, dict):
            return SortState()

        payload = wrapper.get("payload")
        if not isinstance(payload, dict):
            return SortState()

        try:
            sort_key = SortKey(payload.get("sort_key", DEFAULT_SORT_KEY.value))
            direction = SortDirection(payload.get("direction", DEFAULT_SORT_DIRECTION.value))
        except ValueError:
            return SortState()
        return SortState(sort_key=sort_key, direction=direction)

    def save(self, state: SortState) -> None:
        self._cache.save(
            "sort_state",
            {"sort_key": state.sort_key.value, "direction": state.direction.value},
        )

"""Pure deadline arithmetic: parsing, remaining time and its rendering."""

from __future__ import annotations

from datetime import datetime, timedelta

from countdown_tasks.config import DEADLINE_LABEL_FORMAT, EXPIRED_LABEL
from countdown_tasks.domain.errors import ValidationError

_MICROS_PER_SECOND = 1_000_000
_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3_600


def parse_deadline(value: str | datetime) -> datetime:
    """Parse a deadline into a naive local ``datetime``.

    Offset-aware values are converted to local time, so every deadline
    compares against ``datetime.now()`` on the same footing.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        raw = (value or "").strip()
        if not raw:
            raise ValidationError("Deadline is required.")
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(f"Deadline is not a valid date/time: {raw!r}") from exc

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def remaining(deadline: str | datetime, now: datetime) -> timedelta:
    """Signed time left until ``deadline``; negative once it has passed."""
    return parse_deadline(deadline) - parse_deadline(now)


def is_expired(deadline: str | datetime, now: datetime) -> bool:
    return remaining(deadline, now) <= timedelta(0)


def format_remaining(duration: timedelta) -> str:
    if duration <= timedelta(0):
        return EXPIRED_LABEL

    # Floor to whole seconds; hours are not rolled into days.
    total_seconds = (duration // timedelta(microseconds=1)) // _MICROS_PER_SECOND
    hours, rest = divmod(total_seconds, _SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, _SECONDS_PER_MINUTE)
    return f"{hours}h {minutes}m {seconds}s"


def format_deadline(deadline: str | datetime) -> str:
    return parse_deadline(deadline).strftime(DEADLINE_LABEL_FORMAT)

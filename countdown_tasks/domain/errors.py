"""Exceptions shared across the task engine."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised at the input boundary for an empty label or a missing/unparseable deadline."""


class StoreError(Exception):
    """Raised by a task store when a remote operation fails."""

    def __init__(self, message: str = "Task store request failed", *, task_id: str | None = None):
        super().__init__(message)
        self.task_id = task_id


class NotFoundError(StoreError):
    """Raised when an update or delete targets an id the store does not hold."""


class StoreTimeoutError(StoreError):
    """Raised when a store request does not answer within the configured timeout."""


class StoreAuthError(StoreError):
    """Raised when the store rejects the stored credentials."""


class AuthRequiredError(Exception):
    """Raised when stored credentials are invalid and interactive re-authentication is needed."""

    def __init__(self, message: str = "Stored token is missing or expired; re-authentication is required"):
        super().__init__(message)

"""Task store backed by the Cloud Firestore REST API."""

from __future__ import annotations

import logging
from typing import Any

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError

from countdown_tasks.application.task_store import check_update_fields
from countdown_tasks.config import COLLECTION_NAME, LIST_PAGE_SIZE, FirestoreSettings
from countdown_tasks.domain.errors import (
    AuthRequiredError,
    NotFoundError,
    StoreAuthError,
    StoreError,
    StoreTimeoutError,
)
from countdown_tasks.domain.models import Task
from countdown_tasks.infrastructure.google.auth_service import GoogleAuthService


logger = logging.getLogger(__name__)


def _encode_value(value: Any) -> dict:
    if isinstance(value, bool):
        return {"booleanValue": value}
    return {"stringValue": str(value)}


def _decode_value(value: dict | None) -> Any:
    if not value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "timestampValue" in value:
        return value["timestampValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    return None


def _encode_fields(fields: dict[str, Any]) -> dict:
    return {name: _encode_value(value) for name, value in fields.items()}


def _document_id(name: str) -> str:
    return name.rsplit("/", 1)[-1]


def _translate_error(exc: Exception, action: str, task_id: str | None = None) -> StoreError:
    if isinstance(exc, HttpError):
        status = getattr(exc.resp, "status", None)
        if status == 404:
            return NotFoundError(f"Task {task_id} not found", task_id=task_id)
        if status in (401, 403):
            return StoreAuthError(f"Firestore rejected the credentials while trying to {action}.", task_id=task_id)
        return StoreError(f"Firestore error while trying to {action}: {exc}", task_id=task_id)
    if isinstance(exc, TimeoutError):
        return StoreTimeoutError(f"Firestore timed out while trying to {action}.", task_id=task_id)
    if isinstance(exc, RefreshError):
        return StoreAuthError(f"Could not refresh credentials to {action}.", task_id=task_id)
    return StoreError(f"Could not reach Firestore to {action}: {exc}", task_id=task_id)


class FirestoreTaskGateway:
    """``TaskStore`` over ``projects.databases.documents`` of Firestore v1."""

    def __init__(
        self,
        settings: FirestoreSettings,
        auth_service: GoogleAuthService | None = None,
        collection: str = COLLECTION_NAME,
    ):
        self.settings = settings
        self.auth = auth_service or GoogleAuthService()
        self.collection = collection

    def _documents(self):
        try:
            service = self.auth.get_service()
        except AuthRequiredError as exc:
            logger.error("Firestore needs interactive sign-in: %s", exc)
            raise StoreAuthError("Firestore sign-in expired; restart the app to sign in again.") from exc
        if service is None:
            raise StoreError("Firestore is not available; check credentials.json and token.json.")
        return service.projects().databases().documents()

    def _document_name(self, task_id: str) -> str:
        return f"{self.settings.documents_root}/{self.collection}/{task_id}"

    def _execute(self, request, action: str, task_id: str | None = None) -> dict:
        try:
            return request.execute(num_retries=0) or {}
        except (HttpError, OSError, httplib2.HttpLib2Error, RefreshError, TransportError) as exc:
            error = _translate_error(exc, action, task_id)
            logger.error("Firestore request failed (%s): %s", action, error)
            raise error from exc

    def list_all(self) -> list[Task]:
        documents = self._documents()
        tasks: list[Task] = []
        page_token = None
        while True:
            params = {
                "parent": self.settings.documents_root,
                "collectionId": self.collection,
                "pageSize": LIST_PAGE_SIZE,
            }
            if page_token:
                params["pageToken"] = page_token
            response = self._execute(documents.list(**params), "list tasks")
            tasks.extend(self._to_task(doc) for doc in response.get("documents", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                return tasks

    def create(self, text: str, deadline: str) -> str:
        body = {"fields": _encode_fields({"text": text, "completed": False, "deadline": deadline})}
        created = self._execute(
            self._documents().createDocument(
                parent=self.settings.documents_root,
                collectionId=self.collection,
                body=body,
            ),
            "create a task",
        )
        name = created.get("name")
        if not name:
            raise StoreError("Firestore did not return a document name for the new task.")
        return _document_id(name)

    def update(self, task_id: str, fields: dict[str, Any]) -> None:
        patch = check_update_fields(fields)
        if not patch:
            return
        self._execute(
            self._documents().patch(
                name=self._document_name(task_id),
                body={"fields": _encode_fields(patch)},
                updateMask_fieldPaths=sorted(patch),
                currentDocument_exists=True,
            ),
            "update a task",
            task_id,
        )

    def delete(self, task_id: str) -> None:
        self._execute(
            self._documents().delete(
                name=self._document_name(task_id),
                currentDocument_exists=True,
            ),
            "delete a task",
            task_id,
        )

    @staticmethod
    def _to_task(document: dict) -> Task:
        fields = document.get("fields", {})
        return Task(
            id=_document_id(document["name"]),
            text=_decode_value(fields.get("text")) or "",
            completed=bool(_decode_value(fields.get("completed"))),
            deadline=_decode_value(fields.get("deadline")) or "",
        )

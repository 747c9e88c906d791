from __future__ import annotations

from datetime import datetime

import pytest

from countdown_tasks.application.controller import TaskCollectionController
from countdown_tasks.config import FirestoreSettings
from countdown_tasks.domain.errors import NotFoundError, StoreError, StoreTimeoutError
from countdown_tasks.domain.models import NotificationLevel, SortDirection, SortKey, Task
from countdown_tasks.infrastructure.google.auth_service import GoogleAuthService
from countdown_tasks.infrastructure.google.firestore_gateway import FirestoreTaskGateway

from .fakes import RecordingStore


def _ids(tasks):
    return [task.id for task in tasks]


@pytest.fixture()
def seeded_store(seeded_tasks) -> RecordingStore:
    return RecordingStore(seeded_tasks)


@pytest.fixture()
def loaded(seeded_store) -> TaskCollectionController:
    controller = TaskCollectionController(seeded_store)
    assert controller.load()
    return controller


class TestLoad:
    def test_replaces_collection_with_store_contents(self, loaded):
        assert _ids(loaded.tasks) == ["a", "b", "c"]
        assert loaded.get("c").completed is True

    def test_failure_keeps_prior_collection(self, loaded, seeded_store):
        received = []
        loaded.notified.connect(received.append)
        seeded_store.fail_next("list_all")

        assert loaded.load() is False
        assert _ids(loaded.tasks) == ["a", "b", "c"]
        assert received[-1].level == NotificationLevel.ERROR

    def test_first_load_failure_leaves_collection_empty(self, controller, store, notifications):
        store.fail_next("list_all", StoreTimeoutError("timed out"))
        assert controller.load() is False
        assert controller.tasks == ()
        assert notifications[-1].is_error

    def test_duplicate_and_empty_ids_are_dropped(self, mocker):
        store = mocker.MagicMock()
        store.list_all.return_value = [
            Task(id="x", text="one", deadline="2025-01-01T10:00"),
            Task(id="", text="blank", deadline="2025-01-01T10:00"),
            Task(id="x", text="two", deadline="2025-01-01T10:00"),
        ]
        controller = TaskCollectionController(store)
        controller.load()
        assert [(t.id, t.text) for t in controller.tasks] == [("x", "one")]

    def test_emits_tasks_changed(self, controller):
        changes = []
        controller.tasks_changed.connect(lambda: changes.append(True))
        controller.load()
        assert changes == [True]


class TestAdd:
    def test_appends_task_with_store_assigned_id(self, controller, store, notifications):
        task = controller.add("Buy milk", "2025-01-01T10:00")

        assert task is not None
        assert len(controller.tasks) == 1
        created = controller.tasks[0]
        assert created.id == task.id
        assert store.calls == [("create", "Buy milk", "2025-01-01T10:00")]
        assert store.record(created.id) == {"text": "Buy milk", "completed": False, "deadline": "2025-01-01T10:00"}
        assert (created.text, created.deadline, created.completed) == ("Buy milk", "2025-01-01T10:00", False)
        assert notifications[-1].level == NotificationLevel.SUCCESS

    def test_failure_makes_no_local_change(self, loaded, seeded_store):
        seeded_store.fail_next("create")
        received = []
        loaded.notified.connect(received.append)

        assert loaded.add("Nope", "2025-01-01T10:00") is None
        assert _ids(loaded.tasks) == ["a", "b", "c"]
        assert received[-1].is_error

    def test_appends_after_existing(self, loaded):
        task = loaded.add("Delta", "2025-01-03T10:00")
        assert _ids(loaded.tasks) == ["a", "b", "c", task.id]


class TestEdit:
    def test_success_updates_text_and_deadline(self, loaded, seeded_store):
        assert loaded.edit("a", "Alpha 2", "2025-02-01T08:00") is True

        edited = loaded.get("a")
        assert (edited.text, edited.deadline, edited.completed) == ("Alpha 2", "2025-02-01T08:00", False)
        assert seeded_store.calls[-1] == ("update", "a", {"text": "Alpha 2", "deadline": "2025-02-01T08:00"})

    def test_failure_leaves_task_unchanged(self, loaded, seeded_store):
        seeded_store.fail_next("update")
        assert loaded.edit("a", "Changed", "2026-01-01T00:00") is False
        assert loaded.get("a").text == "Alpha"
        assert loaded.get("a").deadline == "2025-01-01T12:00"

    def test_unknown_id_reports_not_found(self, loaded, seeded_store):
        received = []
        loaded.notified.connect(received.append)
        assert loaded.edit("zzz", "Ghost", "2025-01-01T10:00") is False
        assert ("update", "zzz", {"text": "Ghost", "deadline": "2025-01-01T10:00"}) in seeded_store.calls
        assert received[-1].is_error


class TestToggleComplete:
    def test_flips_locally_before_remote_call(self, loaded, seeded_store):
        seen_during_call = []
        seeded_store.on_update = lambda task_id, fields: seen_during_call.append(loaded.get(task_id).completed)

        assert loaded.toggle_complete("a") is True
        assert seen_during_call == [True]
        assert seeded_store.calls[-1] == ("update", "a", {"completed": True})
        assert seeded_store.record("a")["completed"] is True

    def test_view_refresh_happens_before_remote_call(self, loaded, seeded_store):
        order = []
        loaded.tasks_changed.connect(lambda: order.append("changed"))
        seeded_store.on_update = lambda task_id, fields: order.append("remote")

        loaded.toggle_complete("b")
        assert order == ["changed", "remote"]

    def test_remote_failure_keeps_local_flip(self, loaded, seeded_store):
        received = []
        loaded.notified.connect(received.append)
        seeded_store.fail_next("update", StoreError("offline"))

        assert loaded.toggle_complete("a") is False
        assert loaded.get("a").completed is True
        assert seeded_store.record("a")["completed"] is False
        assert received[-1].is_error
        assert received[-1].task_id == "a"

    def test_toggle_is_reversible(self, loaded):
        loaded.toggle_complete("c")
        assert loaded.get("c").completed is False
        loaded.toggle_complete("c")
        assert loaded.get("c").completed is True

    def test_unknown_id_makes_no_remote_call(self, loaded, seeded_store):
        calls_before = list(seeded_store.calls)
        assert loaded.toggle_complete("missing") is False
        assert seeded_store.calls == calls_before


class TestDelete:
    def test_removes_exactly_one_and_keeps_order(self, loaded):
        assert loaded.delete("b") is True
        assert _ids(loaded.tasks) == ["a", "c"]

    def test_second_delete_fails_without_change(self, loaded, seeded_store):
        received = []
        loaded.notified.connect(received.append)
        loaded.delete("b")

        assert loaded.delete("b") is False
        assert _ids(loaded.tasks) == ["a", "c"]
        assert received[-1].is_error

    def test_store_raises_not_found_for_second_delete(self, loaded, seeded_store):
        loaded.delete("b")
        with pytest.raises(NotFoundError):
            seeded_store.delete("b")

    def test_failure_leaves_collection(self, loaded, seeded_store):
        seeded_store.fail_next("delete")
        assert loaded.delete("a") is False
        assert _ids(loaded.tasks) == ["a", "b", "c"]


class TestReadApi:
    def test_current_view_is_sorted_copy(self, loaded, now):
        view = loaded.current_view(SortKey.DEADLINE, SortDirection.ASCENDING, now)
        assert _ids(view) == ["b", "a", "c"]
        view[0].text = "mutated"
        assert loaded.get("b").text == "Bravo"
        assert _ids(loaded.tasks) == ["a", "b", "c"]

    def test_tasks_snapshot_cannot_write_back(self, loaded):
        snapshot = loaded.tasks
        snapshot[0].completed = True
        assert loaded.get("a").completed is False


def test_end_to_end_add_toggle_delete(controller, store, notifications):
    now = datetime(2025, 1, 1, 9, 0)
    assert controller.load() is True
    assert controller.current_view(SortKey.REMAINING, SortDirection.ASCENDING, now) == []

    task = controller.add("Write report", "2030-01-01T00:00")
    view = controller.current_view(SortKey.REMAINING, SortDirection.ASCENDING, now)
    assert len(view) == 1
    assert view[0].completed is False

    controller.toggle_complete(task.id)
    view = controller.current_view(SortKey.REMAINING, SortDirection.ASCENDING, now)
    assert view[0].completed is True

    controller.delete(task.id)
    assert controller.current_view(SortKey.REMAINING, SortDirection.ASCENDING, now) == []
    assert store.list_all() == []
    assert [n.level for n in notifications] == [NotificationLevel.SUCCESS] * 3


class TestFirestoreSignInExpired:
    @pytest.fixture()
    def signed_out(self, tmp_path) -> TaskCollectionController:
        credentials = tmp_path / "credentials.json"
        credentials.write_text("{}", encoding="utf-8")
        auth = GoogleAuthService(credentials_path=str(credentials), token_path=str(tmp_path / "token.json"))
        return TaskCollectionController(FirestoreTaskGateway(FirestoreSettings("demo"), auth_service=auth))

    def test_load_reports_error_instead_of_raising(self, signed_out):
        received = []
        signed_out.notified.connect(received.append)

        assert signed_out.load() is False
        assert signed_out.tasks == ()
        assert received[-1].is_error

    def test_mutations_report_error_instead_of_raising(self, signed_out):
        received = []
        signed_out.notified.connect(received.append)

        assert signed_out.add("Write report", "2030-01-01T00:00") is None
        signed_out.delete("missing")
        assert len(received) == 2
        assert all(notification.is_error for notification in received)

from __future__ import annotations

import json

from countdown_tasks.config import DATABASE_ID_ENV, PROJECT_ID_ENV, FirestoreSettings, load_firestore_settings


def test_reads_firebase_json(tmp_path, monkeypatch):
    monkeypatch.delenv(PROJECT_ID_ENV, raising=False)
    monkeypatch.delenv(DATABASE_ID_ENV, raising=False)
    path = tmp_path / "firebase.json"
    path.write_text(json.dumps({"projectId": "demo", "apiKey": "ignored"}), encoding="utf-8")

    settings = load_firestore_settings(str(path))

    assert settings == FirestoreSettings(project_id="demo", database_id="(default)")
    assert settings.documents_root == "projects/demo/databases/(default)/documents"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "firebase.json"
    path.write_text(json.dumps({"projectId": "from-file"}), encoding="utf-8")
    monkeypatch.setenv(PROJECT_ID_ENV, "from-env")
    monkeypatch.setenv(DATABASE_ID_ENV, "tasks-db")

    assert load_firestore_settings(str(path)) == FirestoreSettings(project_id="from-env", database_id="tasks-db")


def test_none_without_project(tmp_path, monkeypatch):
    monkeypatch.delenv(PROJECT_ID_ENV, raising=False)
    assert load_firestore_settings(str(tmp_path / "missing.json")) is None


def test_corrupt_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv(PROJECT_ID_ENV, raising=False)
    path = tmp_path / "firebase.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_firestore_settings(str(path)) is None

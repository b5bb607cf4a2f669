"""Tests for planner/store.py — load/save, export and reset."""

import json
from unittest.mock import patch

from planner.days import ensure_day
from planner.fileio import read_json
from planner.reflections import save_reflection
from planner.store import PlannerStore, export_filename
from planner.tasks import add_task, toggle_task


def test_open_workspace(workspace):
    store = PlannerStore.open(workspace)
    assert store.settings.max_streak_lookback_days == 400
    assert store.stats.total_completed == 2
    assert store.reflections["2026-02-10"] == "Solid start."
    assert store.days["2026-02-10"].custom[0].id == "abc123"


def test_load_missing_file(tmp_path):
    store = PlannerStore(path=tmp_path / "nope.json")
    assert store.load() is False
    assert store.days == {}
    assert store.stats.total_completed == 0


def test_load_corrupt_file_falls_back_to_empty(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text("{not json", encoding="utf-8")
    store = PlannerStore(path=path)
    assert store.load() is False
    assert store.days == {}


def test_load_non_object_is_corrupt(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    store = PlannerStore(path=path)
    assert store.load() is False
    assert store.custom_tasks == []


def test_load_partial_snapshot_keeps_siblings(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text(json.dumps({"reflections": {"2026-02-01": "hi"}, "theme": "dark"}), encoding="utf-8")
    store = PlannerStore(path=path)
    store.load()
    assert store.days == {}
    assert store.stats.current_streak == 0
    ensure_day(store, "2026-02-11")
    data = read_json(path)
    assert data["theme"] == "dark"
    assert data["reflections"] == {"2026-02-01": "hi"}
    assert "2026-02-11" in data["tasks"]


def test_every_mutation_is_persisted(tmp_path):
    path = tmp_path / "planner.json"
    store = PlannerStore(path=path)
    task = add_task(store, "2026-02-11", {"title": "Plan trip", "category": "family"})
    toggle_task(store, "2026-02-11", "evening", task.id)
    save_reflection(store, "2026-02-11", "Good")

    data = read_json(path)
    evening = data["tasks"]["2026-02-11"]["evening"]
    assert evening[-1]["id"] == task.id
    assert evening[-1]["completed"] is True
    assert data["stats"]["totalCompleted"] == 1
    assert data["reflections"]["2026-02-11"] == "Good"


def test_save_failure_keeps_memory(tmp_path):
    store = PlannerStore(path=tmp_path / "planner.json")
    with patch("planner.store.write_text_atomic", side_effect=OSError("disk full")):
        ensure_day(store, "2026-02-11")
    assert "2026-02-11" in store.days
    assert store.last_save_error == "disk full"
    assert store.save() is True
    assert store.last_save_error is None


def test_serialize_round_trip(store):
    add_task(store, "2026-02-11", {"title": "Read", "category": "study", "description": "Ch. 3"})
    toggle_task(store, "2026-02-11", "work", "Lunch break")
    save_reflection(store, "2026-02-11", "Nice")
    store.stats.current_streak = 3

    text = store.serialize()
    restored = PlannerStore.from_text(text)
    assert restored.snapshot.to_dict() == store.snapshot.to_dict()
    assert json.loads(text)["stats"] == {"totalCompleted": 1, "currentStreak": 3}


def test_export_to(tmp_path, store):
    ensure_day(store, "2026-02-11")
    target = store.export_to("2026-02-11", tmp_path / "exports")
    assert target.name == export_filename("2026-02-11") == "task-planner-backup-2026-02-11.json"
    assert PlannerStore.from_text(target.read_text(encoding="utf-8")).days.keys() == {"2026-02-11"}


def test_export_defaults_to_workspace_exports(workspace):
    store = PlannerStore.open(workspace)
    target = store.export_to("2026-02-11")
    assert target.parent == workspace / "exports"


def test_reset(workspace):
    store = PlannerStore.open(workspace)
    store.reset()
    assert store.days == {}
    assert store.reflections == {}
    assert not (workspace / "data" / "planner.json").exists()
    assert PlannerStore.open(workspace).days == {}

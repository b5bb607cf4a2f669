"""Tests for planner/commands.py — the action dispatch table."""

from unittest.mock import patch

from planner.commands import ACTIONS, dispatch
from planner.days import get_day

KEY = "2026-02-11"


def test_all_actions_registered():
    assert set(ACTIONS) == {
        "add_task", "toggle_task", "delete_task", "save_reflection",
        "select_date", "refresh", "export", "reset",
    }


def test_unknown_action(store):
    outcome = dispatch(store, "launch_rockets", {})
    assert outcome == {"ok": False, "error": "validation", "reason": "Unknown action: launch_rockets"}


def test_select_date_returns_day_view(store):
    outcome = dispatch(store, "select_date", {"date": KEY})
    assert outcome["ok"] is True
    view = outcome["day"]
    assert view["date"] == KEY
    assert view["totalTasks"] == 16
    assert view["dayCompletion"] == 0
    assert get_day(store, KEY) is not None


def test_select_date_defaults_to_today(store):
    with patch("planner.commands.today_key", return_value=KEY):
        outcome = dispatch(store, "select_date")
    assert outcome["day"]["date"] == KEY


def test_invalid_date(store):
    outcome = dispatch(store, "select_date", {"date": "tomorrow"})
    assert outcome["ok"] is False
    assert outcome["error"] == "validation"


def test_week_date_is_not_a_day_key(store):
    outcome = dispatch(store, "select_date", {"date": "2026-W07-3"})
    assert outcome["error"] == "validation"
    assert store.days == {}


def test_add_task_outcome(store):
    outcome = dispatch(store, "add_task", {"date": KEY, "title": "Yoga", "category": "health", "time": "05:00"})
    assert outcome["ok"] is True
    assert outcome["task"]["section"] == "essential"
    # Manual tasks surface first in the view.
    assert outcome["day"]["sections"]["essential"][0]["title"] == "Yoga"
    assert outcome["day"]["badges"]["essential"]["manualCount"] == 1


def test_add_task_missing_title(store):
    outcome = dispatch(store, "add_task", {"date": KEY, "category": "work"})
    assert outcome["ok"] is False
    assert outcome["error"] == "validation"


def test_toggle_updates_streak_and_total(store):
    dispatch(store, "select_date", {"date": KEY})
    day = get_day(store, KEY)
    for section, tasks in day.items():
        for t in tasks[:-1] if section == "work" else tasks:
            dispatch(store, "toggle_task", {"date": KEY, "section": section, "ref": t.ref})
    # 15 of 16 done
    outcome = dispatch(store, "refresh", {"date": KEY})
    assert outcome["day"]["dayCompletion"] == 94
    assert outcome["day"]["currentStreak"] == 1
    assert outcome["day"]["totalCompleted"] == 15
    assert store.stats.current_streak == 1


def test_toggle_messages(store):
    dispatch(store, "select_date", {"date": KEY})
    on = dispatch(store, "toggle_task", {"date": KEY, "section": "work", "ref": "Lunch break"})
    assert on["message"] == "Task completed!"
    off = dispatch(store, "toggle_task", {"date": KEY, "section": "work", "ref": "Lunch break"})
    assert off["task"]["completed"] is False


def test_toggle_missing_reports_not_found(store):
    outcome = dispatch(store, "toggle_task", {"date": KEY, "section": "work", "ref": "Lunch break"})
    assert outcome["ok"] is False
    assert outcome["error"] == "not_found"


def test_toggle_requires_section(store):
    outcome = dispatch(store, "toggle_task", {"date": KEY, "ref": "Lunch break"})
    assert outcome["error"] == "validation"


def test_delete_default_reports_permission(store):
    dispatch(store, "select_date", {"date": KEY})
    outcome = dispatch(store, "delete_task", {"date": KEY, "section": "work", "ref": "Lunch break"})
    assert outcome["ok"] is False
    assert outcome["error"] == "permission"
    assert len(get_day(store, KEY).work) == 5


def test_delete_by_id_from_other_day(store):
    added = dispatch(store, "add_task", {"date": "2026-02-01", "title": "Old errand"})
    task_id = added["task"]["id"]
    outcome = dispatch(store, "delete_task", {"date": KEY, "ref": task_id})
    assert outcome["ok"] is True
    assert outcome["day"]["date"] == "2026-02-01"
    assert get_day(store, "2026-02-01").custom == []
    assert store.custom_tasks == []


def test_save_reflection(store):
    outcome = dispatch(store, "save_reflection", {"date": KEY, "text": "Calm."})
    assert outcome["ok"] is True
    assert outcome["day"]["reflection"] == "Calm."


def test_export(store, tmp_path):
    dispatch(store, "select_date", {"date": KEY})
    outcome = dispatch(store, "export", {"date": KEY, "write": True, "directory": str(tmp_path)})
    assert outcome["filename"] == "task-planner-backup-2026-02-11.json"
    assert outcome["path"] == str(tmp_path / outcome["filename"])
    assert '"2026-02-11"' in outcome["content"]


def test_reset_requires_confirmation(store):
    dispatch(store, "select_date", {"date": KEY})
    assert dispatch(store, "reset", {})["ok"] is False
    assert get_day(store, KEY) is not None
    assert dispatch(store, "reset", {"confirm": True})["ok"] is True
    assert get_day(store, KEY) is None


def test_save_failure_surfaces_warning(tmp_path):
    from planner.store import PlannerStore

    store = PlannerStore(path=tmp_path / "planner.json")
    with patch("planner.store.write_text_atomic", side_effect=OSError("read-only")):
        outcome = dispatch(store, "save_reflection", {"date": KEY, "text": "x"})
    assert outcome["ok"] is True
    assert "read-only" in outcome["warning"]
    assert store.reflections[KEY] == "x"

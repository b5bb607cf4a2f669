"""Action dispatch: maps UI action tags to core operations.

Every handler takes ``(store, key, payload)`` and returns an outcome dict.
``dispatch`` converts planner errors into ``{"ok": False, ...}`` outcomes and
refreshes the streak after each mutation, so callers never see an exception
for a recoverable failure.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from planner.analytics import refresh_stats
from planner.datekey import from_key, today_key
from planner.days import ensure_day
from planner.errors import NotFoundError, PlannerError, ValidationError
from planner.reflections import save_reflection
from planner.store import PlannerStore, export_filename
from planner.tasks import add_task, delete_task, find_manual_task, toggle_task
from planner.views import day_view

logger = logging.getLogger(__name__)

Handler = Callable[[PlannerStore, str, dict[str, Any]], dict[str, Any]]


def _require(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    if value is None or str(value) == "":
        raise ValidationError(f"Missing required field: {name}")
    return str(value)


def _add_task(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    task = add_task(store, key, payload)
    return {"task": dict(task.to_dict(), ref=task.ref), "message": "Task added to the top of the list!"}


def _toggle_task(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    task = toggle_task(store, key, _require(payload, "section"), _require(payload, "ref"))
    if task.completed:
        message = "Your custom task completed!" if task.is_manual else "Task completed!"
    else:
        message = "Task marked as not done."
    return {"task": dict(task.to_dict(), ref=task.ref), "message": message}


def _delete_task(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    ref = _require(payload, "ref")
    section = payload.get("section")
    if not section:
        # Manual tasks can be deleted by id alone, from any day.
        found = find_manual_task(store, ref)
        if found is None:
            raise NotFoundError(f"Task not found: {ref}")
        key, section, _task = found
    task = delete_task(store, key, str(section), ref)
    return {"task": dict(task.to_dict(), ref=task.ref), "date": key, "message": "Task deleted successfully!"}


def _save_reflection(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    save_reflection(store, key, str(payload.get("text", "") or ""))
    return {"message": "Reflection saved!"}


def _select_date(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    ensure_day(store, key)
    return {}


def _refresh(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    return {}


def _export(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {
        "filename": export_filename(key),
        "content": store.serialize(),
        "message": "Data exported successfully!",
    }
    if payload.get("write"):
        directory = payload.get("directory")
        try:
            out["path"] = str(store.export_to(key, Path(directory) if directory else None))
        except OSError as e:
            raise PlannerError(f"Export failed: {e}") from e
    return out


def _reset(store: PlannerStore, key: str, payload: dict[str, Any]) -> dict[str, Any]:
    if payload.get("confirm") is not True:
        raise ValidationError("Reset requires confirmation")
    store.reset()
    return {"message": "All data has been reset."}


ACTIONS: dict[str, Handler] = {
    "add_task": _add_task,
    "toggle_task": _toggle_task,
    "delete_task": _delete_task,
    "save_reflection": _save_reflection,
    "select_date": _select_date,
    "refresh": _refresh,
    "export": _export,
    "reset": _reset,
}

# Actions after which the streak is recomputed and the day view returned.
MUTATING = {"add_task", "toggle_task", "delete_task", "save_reflection", "select_date", "refresh"}


def dispatch(store: PlannerStore, action: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    """Run *action* against *store*. Always returns an outcome dict."""
    payload = dict(payload or {})
    try:
        handler = ACTIONS.get(action)
        if handler is None:
            raise ValidationError(f"Unknown action: {action}")
        key = str(payload.get("date") or today_key(store.settings))
        from_key(key)
        result = handler(store, key, payload)
        if action in MUTATING:
            view_key = result.pop("date", key)
            refresh_stats(store, view_key)
            result["day"] = day_view(store, view_key)
    except PlannerError as e:
        logger.info("Action %s failed: %s", action, e)
        return e.to_outcome()

    outcome = {"ok": True, "action": action}
    outcome.update(result)
    if store.last_save_error:
        outcome["warning"] = f"Changes kept in memory but not saved: {store.last_save_error}"
    return outcome

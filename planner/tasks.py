"""Task CRUD, completion toggling and display ordering for DayPlanner."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any

from planner.catalog import section_for_category
from planner.days import ensure_day, get_day
from planner.errors import NotFoundError, PermissionDeniedError, ValidationError
from planner.models import CATEGORIES, SECTIONS, DaySections, Identity, Task, TaskDraft, TaskId, TitleKey
from planner.store import PlannerStore
from planner.workspace import now_local

logger = logging.getLogger(__name__)


# ── Lookup ────────────────────────────────────────────────────


def resolve_identity(ref: str | Identity) -> tuple[Identity, ...]:
    """Candidate identities for a caller-supplied reference.

    A plain string may name either a generated id or a catalog title; ids are
    tried first.
    """
    if isinstance(ref, (TaskId, TitleKey)):
        return (ref,)
    return (TaskId(ref), TitleKey(ref))


def find_index(tasks: list[Task], ref: str | Identity) -> int:
    """Index of the task matching *ref*, or -1."""
    for candidate in resolve_identity(ref):
        for i, t in enumerate(tasks):
            if t.identity == candidate:
                return i
    return -1


def _section_tasks(store: PlannerStore, key: str, section: str) -> list[Task]:
    day = get_day(store, key)
    if day is None:
        raise NotFoundError(f"No tasks recorded for {key}")
    tasks = day.section(section)
    if tasks is None:
        raise NotFoundError(f"Unknown section: {section}")
    return tasks


# ── CRUD ──────────────────────────────────────────────────────


_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def normalize_time(value: str) -> str:
    """Zero-padded ``HH:MM``; blank means ``00:00``. Display order compares these as strings."""
    value = (value or "").strip()
    if not value:
        return "00:00"
    m = _TIME_RE.match(value)
    if not m:
        raise ValidationError(f"Invalid time (expected HH:MM): {value!r}")
    return f"{int(m.group(1)):02d}:{m.group(2)}"


def generate_id() -> str:
    return uuid.uuid4().hex


def add_task(store: PlannerStore, key: str, draft: TaskDraft | dict[str, Any]) -> Task:
    """Create a manual task for *key* in the section its category maps to."""
    if isinstance(draft, dict):
        draft = TaskDraft.from_dict(draft)
    title = draft.title.strip()
    if not title:
        raise ValidationError("Missing required field: title")

    category = draft.category.strip().lower()
    if category not in CATEGORIES:
        category = "personal"
    section = section_for_category(category)

    task = Task(
        id=generate_id(),
        title=title,
        description=draft.description.strip(),
        time=normalize_time(draft.time),
        category=category,
        section=section,
        completed=False,
        is_default=False,
        is_manual=True,
        created_at=now_local(store.settings).isoformat(timespec="seconds"),
    )

    day = ensure_day(store, key)
    day.section(section).append(task)
    store.custom_tasks.append(task)
    store.save()
    logger.info("Added task %s (%s) to %s/%s", task.id, task.title, key, section)
    return task


def toggle_task(store: PlannerStore, key: str, section: str, ref: str | Identity) -> Task:
    """Flip a task's completion and keep the completed counter in step."""
    tasks = _section_tasks(store, key, section)
    idx = find_index(tasks, ref)
    if idx == -1:
        raise NotFoundError(f"Task not found: {section}/{ref}")

    task = tasks[idx]
    task.completed = not task.completed
    stats = store.stats
    if task.completed:
        stats.total_completed += 1
    else:
        stats.total_completed = max(0, stats.total_completed - 1)

    _sync_registry(store, task)
    store.save()
    logger.debug("Toggled %s/%s/%s -> %s", key, section, task.ref, task.completed)
    return task


def delete_task(store: PlannerStore, key: str, section: str, ref: str | Identity) -> Task:
    """Remove a manual task from its section and from the manual-task registry."""
    tasks = _section_tasks(store, key, section)
    idx = find_index(tasks, ref)
    if idx == -1:
        raise NotFoundError(f"Task not found: {section}/{ref}")

    task = tasks[idx]
    if not task.is_manual:
        raise PermissionDeniedError(f"Cannot delete default task: {task.title}")

    tasks.pop(idx)
    reg_idx = find_index(store.custom_tasks, task.identity)
    if reg_idx != -1:
        store.custom_tasks.pop(reg_idx)
    store.save()
    logger.info("Deleted task %s from %s/%s", task.ref, key, section)
    return task


def _sync_registry(store: PlannerStore, task: Task) -> None:
    # After a reload the registry holds its own copies of manual tasks.
    if not task.is_manual:
        return
    idx = find_index(store.custom_tasks, task.identity)
    if idx != -1 and store.custom_tasks[idx] is not task:
        store.custom_tasks[idx].completed = task.completed


# ── Display ───────────────────────────────────────────────────


def sort_for_display(tasks: list[Task]) -> list[Task]:
    """Manual tasks first, then by time of day. Stable; returns a new list."""
    return sorted(tasks, key=lambda t: (0 if t.is_manual else 1, t.time or "00:00"))


def section_badges(day: DaySections | None) -> dict[str, dict[str, int]]:
    """Per-section ``{completed, total, manualCount}`` counts."""
    badges = {}
    for name in SECTIONS:
        tasks = day.section(name) if day is not None else []
        badges[name] = {
            "completed": sum(1 for t in tasks if t.completed),
            "total": len(tasks),
            "manualCount": sum(1 for t in tasks if t.is_manual),
        }
    return badges


def find_manual_task(store: PlannerStore, task_id: str) -> tuple[str, str, Task] | None:
    """Locate a manual task by id across all days: (key, section, task)."""
    for key in sorted(store.days):
        for section, tasks in store.days[key].items():
            for t in tasks:
                if t.is_manual and t.id == task_id:
                    return key, section, t
    return None

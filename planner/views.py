"""Read models handed to renderers (TUI, HTTP). No UI work happens here."""

from __future__ import annotations

from typing import Any

from planner.analytics import (
    day_completion,
    month_calendar,
    month_completion,
    month_summary,
    week_completion,
    week_overview,
)
from planner.datekey import from_key
from planner.days import get_day
from planner.models import SECTIONS
from planner.reflections import get_reflection
from planner.store import PlannerStore
from planner.tasks import section_badges, sort_for_display


def day_view(store: PlannerStore, key: str) -> dict[str, Any]:
    """Everything needed to draw one day: sorted sections, badges, numbers."""
    ref = from_key(key)
    day = get_day(store, key)
    sections = {}
    for name in SECTIONS:
        tasks = day.section(name) if day is not None else []
        sections[name] = [dict(t.to_dict(), ref=t.ref) for t in sort_for_display(tasks)]
    completed, total = day.counts() if day is not None else (0, 0)
    return {
        "date": key,
        "sections": sections,
        "badges": section_badges(day),
        "reflection": get_reflection(store, key),
        "completedTasks": completed,
        "totalTasks": total,
        "dayCompletion": day_completion(store, key),
        "weekCompletion": week_completion(store, ref),
        "monthCompletion": month_completion(store, ref),
        "currentStreak": store.stats.current_streak,
        "totalCompleted": store.stats.total_completed,
    }


def week_view(store: PlannerStore, key: str) -> dict[str, Any]:
    return {
        "date": key,
        "days": week_overview(store, key),
        "weekCompletion": week_completion(store, key),
    }


def month_view(store: PlannerStore, key: str, today: str) -> dict[str, Any]:
    return {
        "date": key,
        "calendar": month_calendar(store, key, today),
        "summary": month_summary(store, key, today),
        "monthCompletion": month_completion(store, key),
    }

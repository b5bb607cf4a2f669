"""Completion and streak analytics for DayPlanner.

All figures are derived from the DayStore on demand. Percentages are
integers rounded half-up; a day without an entry counts as 0%.
"""

from __future__ import annotations

import calendar
import logging
import math
from datetime import date, timedelta
from typing import Any

from planner.datekey import from_key, iter_keys, to_key
from planner.models import Stats
from planner.store import PlannerStore

logger = logging.getLogger(__name__)

STREAK_THRESHOLD = 0.8


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _as_date(reference: date | str) -> date:
    return from_key(reference) if isinstance(reference, str) else reference


def _counts(store: PlannerStore, key: str) -> tuple[int, int]:
    day = store.days.get(key)
    if day is None:
        return 0, 0
    return day.counts()


# ── Per-day ───────────────────────────────────────────────────


def day_completion(store: PlannerStore, key: str) -> int:
    """Percentage of the day's tasks completed, 0 when there are none."""
    completed, total = _counts(store, key)
    if total == 0:
        return 0
    return round_half_up(100 * completed / total)


def completion_ratio(store: PlannerStore, key: str) -> float:
    completed, total = _counts(store, key)
    return completed / total if total > 0 else 0.0


def qualifies_for_streak(store: PlannerStore, key: str) -> bool:
    """A day counts toward the streak iff it exists and is at least 80% done."""
    if key not in store.days:
        return False
    return completion_ratio(store, key) >= STREAK_THRESHOLD


# ── Windows ───────────────────────────────────────────────────


def week_start(reference: date) -> date:
    """Sunday on or before *reference*."""
    return reference - timedelta(days=(reference.weekday() + 1) % 7)


def month_bounds(reference: date) -> tuple[date, date]:
    last = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last)


def average_completion(store: PlannerStore, start: date, end: date) -> int:
    """Mean of the per-day percentages from *start* through *end*."""
    keys = list(iter_keys(start, end))
    if not keys:
        return 0
    return round_half_up(sum(day_completion(store, k) for k in keys) / len(keys))


def week_completion(store: PlannerStore, reference: date | str) -> int:
    """Average over the Sunday-start week, excluding days after *reference*."""
    ref = _as_date(reference)
    return average_completion(store, week_start(ref), ref)


def month_completion(store: PlannerStore, reference: date | str) -> int:
    """Average from the first of the month through *reference*."""
    ref = _as_date(reference)
    first, last = month_bounds(ref)
    return average_completion(store, first, min(last, ref))


# ── Streak ────────────────────────────────────────────────────


def streak(store: PlannerStore, reference: date | str, max_days: int | None = None) -> int:
    """Consecutive qualifying days ending at *reference*, scanning backward.

    Stops at the first day below the threshold or without an entry. The scan
    never looks back further than ``max_days`` (settings default).
    """
    if max_days is None:
        max_days = store.settings.max_streak_lookback_days
    current = _as_date(reference)
    count = 0
    while count < max_days:
        if not qualifies_for_streak(store, to_key(current)):
            break
        count += 1
        try:
            current -= timedelta(days=1)
        except OverflowError:
            break
    # Warn only when the run would have continued past the cap.
    if count >= max_days and qualifies_for_streak(store, to_key(current)):
        logger.warning("Streak scan hit the %d-day lookback cap", max_days)
    return count


def refresh_stats(store: PlannerStore, reference: date | str) -> Stats:
    """Recompute the current streak and persist.

    ``total_completed`` is only ever adjusted by toggles, so it is left as is
    even if it disagrees with the stored completion flags.
    """
    store.stats.current_streak = streak(store, reference)
    store.save()
    return store.stats


# ── Overviews ─────────────────────────────────────────────────


DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def week_overview(store: PlannerStore, reference: date | str) -> list[dict[str, Any]]:
    """Seven day cards for the Sunday-start week containing *reference*."""
    start = week_start(_as_date(reference))
    cards = []
    for i in range(7):
        d = start + timedelta(days=i)
        key = to_key(d)
        _completed, total = _counts(store, key)
        cards.append({
            "date": key,
            "dayName": DAY_NAMES[i],
            "completion": day_completion(store, key),
            "totalTasks": total,
        })
    return cards


def month_summary(store: PlannerStore, reference: date | str, today: date | str) -> dict[str, Any]:
    """Perfect days, average completion, task total and streak for a month.

    Days after *today* are not counted; the average is over the elapsed days.
    """
    first, last = month_bounds(_as_date(reference))
    end = min(last, _as_date(today))

    perfect_days = 0
    total_completion = 0
    total_tasks = 0
    elapsed = 0
    for key in iter_keys(first, end):
        completion = day_completion(store, key)
        total_completion += completion
        if completion == 100:
            perfect_days += 1
        total_tasks += _counts(store, key)[1]
        elapsed += 1

    return {
        "month": first.strftime("%Y-%m"),
        "perfectDays": perfect_days,
        "averageCompletion": round_half_up(total_completion / elapsed) if elapsed else 0,
        "totalTasks": total_tasks,
        "currentStreak": store.stats.current_streak,
    }


def month_calendar(store: PlannerStore, reference: date | str, today: date | str) -> dict[str, Any]:
    """Per-day completion status for the month grid (Sunday-start)."""
    first, last = month_bounds(_as_date(reference))
    today_k = to_key(_as_date(today))
    days = []
    for key in iter_keys(first, last):
        completion = day_completion(store, key)
        if key == today_k:
            status = "today"
        elif completion == 100:
            status = "completed"
        elif completion > 0:
            status = "partial"
        else:
            status = "empty"
        days.append({"date": key, "day": int(key[-2:]), "completion": completion, "status": status})
    return {
        "month": first.strftime("%Y-%m"),
        "leadingBlanks": (first.weekday() + 1) % 7,
        "days": days,
    }

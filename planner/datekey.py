"""Canonical per-day keys (``YYYY-MM-DD`` in local time).

Keys are zero-padded so lexical order equals chronological order. No timezone
conversion happens here: a ``datetime`` is keyed by its own calendar date.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

from planner.errors import ValidationError
from planner.models import Settings
from planner.workspace import now_local


def to_key(d: date | datetime) -> str:
    if isinstance(d, datetime):
        d = d.date()
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def from_key(key: str) -> date:
    """Inverse of to_key. Raises ValidationError for anything not ``YYYY-MM-DD``."""
    try:
        parsed = date.fromisoformat(key)
    except (TypeError, ValueError):
        parsed = None
    # fromisoformat also takes week dates and compact forms; only the canonical key is valid.
    if parsed is None or to_key(parsed) != key:
        raise ValidationError(f"Invalid date key: {key!r}")
    return parsed


def today_key(settings: Settings | None = None) -> str:
    return to_key(now_local(settings))


def shift_key(key: str, days: int) -> str:
    return to_key(from_key(key) + timedelta(days=days))


def iter_keys(start: date, end: date) -> Iterator[str]:
    """Keys from *start* through *end* inclusive; empty when end < start."""
    current = start
    while current <= end:
        yield to_key(current)
        current += timedelta(days=1)

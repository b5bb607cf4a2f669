"""Free-text daily reflections, keyed by date and independent of task data."""

from __future__ import annotations

import logging

from planner.datekey import from_key
from planner.store import PlannerStore

logger = logging.getLogger(__name__)


def get_reflection(store: PlannerStore, key: str) -> str:
    return store.reflections.get(key, "")


def save_reflection(store: PlannerStore, key: str, text: str) -> bool:
    """Create or overwrite the reflection for *key*. Returns the save outcome."""
    from_key(key)
    store.reflections[key] = text
    saved = store.save()
    logger.info("Saved reflection for %s (%d chars)", key, len(text))
    return saved


def reflections_markdown(store: PlannerStore) -> str:
    """All non-empty reflections as a rolling markdown log, newest first."""
    lines = ["# Reflections (rolling)", "", "Newest entries at the top.", "", "---", ""]
    for key in sorted(store.reflections, reverse=True):
        text = store.reflections[key].strip()
        if not text:
            continue
        lines += [f"## {key}", "", text, ""]
    return "\n".join(lines)

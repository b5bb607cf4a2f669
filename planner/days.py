"""Per-day task sections, created once per date key and never recreated."""

from __future__ import annotations

import logging

from planner.catalog import default_sections
from planner.datekey import from_key
from planner.models import DaySections
from planner.store import PlannerStore

logger = logging.getLogger(__name__)


def get_day(store: PlannerStore, key: str) -> DaySections | None:
    return store.days.get(key)


def ensure_day(store: PlannerStore, key: str) -> DaySections:
    """Return the sections for *key*, seeding them from the catalog on first access.

    Idempotent: an existing entry is returned untouched, so completion state
    and manual tasks recorded earlier survive any number of calls.
    """
    day = store.days.get(key)
    if day is not None:
        return day
    from_key(key)  # rejects malformed keys
    day = default_sections()
    store.days[key] = day
    logger.info("Initialized day %s with default tasks", key)
    store.save()
    return day

"""Shared test fixtures for DayPlanner tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from planner.models import DaySections, Settings, Task
from planner.store import PlannerStore


def make_day(done: int, total: int, manual: int = 0) -> DaySections:
    """A day whose custom section holds *total* tasks, the first *done* completed."""
    tasks = []
    for i in range(total):
        is_manual = i < manual
        tasks.append(Task(
            id=f"t{i}" if is_manual else "",
            title=f"Task {i}",
            time=f"{8 + i % 12:02d}:00",
            category="personal",
            section="custom",
            completed=i < done,
            is_default=not is_manual,
            is_manual=is_manual,
        ))
    return DaySections(custom=tasks)


@pytest.fixture
def store() -> PlannerStore:
    """In-memory store (no backing file)."""
    return PlannerStore(settings=Settings())


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with config and a small history."""
    root = tmp_path / "workspace"
    (root / "data").mkdir(parents=True)

    config = {
        "max_streak_lookback_days": 400,
        "log_level": "DEBUG",
    }
    (root / "config.yaml").write_text(
        yaml.dump(config, default_flow_style=False), encoding="utf-8"
    )

    data = {
        "tasks": {
            "2026-02-10": {
                "essential": [
                    {"title": "Morning meditation & gratitude", "time": "05:30", "category": "spiritual",
                     "section": "essential", "completed": True, "isDefault": True},
                    {"title": "Exercise or physical activity", "time": "06:00", "category": "health",
                     "section": "essential", "completed": True, "isDefault": True},
                ],
                "morning": [],
                "work": [],
                "evening": [],
                "custom": [
                    {"id": "abc123", "title": "Call the bank", "time": "11:00", "category": "personal",
                     "section": "custom", "completed": False, "isDefault": False, "isManual": True,
                     "createdAt": "2026-02-10T08:00:00"},
                ],
            },
        },
        "customTasks": [
            {"id": "abc123", "title": "Call the bank", "time": "11:00", "category": "personal",
             "section": "custom", "completed": False, "isDefault": False, "isManual": True,
             "createdAt": "2026-02-10T08:00:00"},
        ],
        "reflections": {"2026-02-10": "Solid start."},
        "stats": {"totalCompleted": 2, "currentStreak": 0},
    }
    (root / "data" / "planner.json").write_text(
        json.dumps(data, indent=2), encoding="utf-8"
    )

    # Set env var
    os.environ["PLANNER_ROOT"] = str(root)
    yield root
    # Cleanup
    if "PLANNER_ROOT" in os.environ:
        del os.environ["PLANNER_ROOT"]

"""Default task catalog and category → section placement rules."""

from __future__ import annotations

from dataclasses import replace

from planner.models import DaySections, Task


def _default(time: str, title: str, category: str, section: str) -> Task:
    return Task(
        title=title,
        time=time,
        category=category,
        section=section,
        is_default=True,
        is_manual=False,
    )


# Templates only: callers always receive copies via default_sections().
ESSENTIAL_TASKS = (
    _default("05:30", "Morning meditation & gratitude", "spiritual", "essential"),
    _default("06:00", "Exercise or physical activity", "health", "essential"),
    _default("22:00", "Plan tomorrow & reflection", "personal", "essential"),
    _default("22:30", "Quality sleep preparation", "health", "essential"),
)

MORNING_TASKS = (
    _default("06:30", "Healthy breakfast", "health", "morning"),
    _default("07:00", "Review daily goals", "personal", "morning"),
    _default("07:30", "Get ready for the day", "personal", "morning"),
)

WORK_TASKS = (
    _default("09:00", "Check emails & prioritize tasks", "work", "work"),
    _default("10:00", "Focus on high-priority project", "work", "work"),
    _default("13:00", "Lunch break", "personal", "work"),
    _default("14:00", "Afternoon work block", "work", "work"),
    _default("17:00", "Wrap up and plan next day", "work", "work"),
)

EVENING_TASKS = (
    _default("18:00", "Dinner with family", "family", "evening"),
    _default("19:00", "Personal learning time", "study", "evening"),
    _default("20:00", "Hobby or relaxation", "personal", "evening"),
    _default("21:00", "Family time", "family", "evening"),
)

_SECTION_BY_CATEGORY = {
    "work": "work",
    "health": "essential",
    "spiritual": "essential",
    "study": "evening",
    "family": "evening",
}


def section_for_category(category: str) -> str:
    """Section a new manual task lands in. Personal and unknown categories go to custom."""
    return _SECTION_BY_CATEGORY.get(category, "custom")


def default_sections() -> DaySections:
    """A fresh copy of the catalog for one day, with an empty custom list."""
    return DaySections(
        essential=[replace(t) for t in ESSENTIAL_TASKS],
        morning=[replace(t) for t in MORNING_TASKS],
        work=[replace(t) for t in WORK_TASKS],
        evening=[replace(t) for t in EVENING_TASKS],
        custom=[],
    )

"""Typed dataclasses for the DayPlanner data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


SECTIONS = ("essential", "morning", "work", "evening", "custom")
CATEGORIES = ("personal", "work", "study", "health", "spiritual", "family")


# ── Identity ──────────────────────────────────────────────────


@dataclass(frozen=True)
class TaskId:
    """Generated id of a manual task."""

    value: str


@dataclass(frozen=True)
class TitleKey:
    """Fallback identity of a catalog task that has no id."""

    value: str


Identity = Union[TaskId, TitleKey]


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class Task:
    id: str = ""
    title: str = ""
    description: str = ""
    time: str = "00:00"  # HH:MM
    category: str = "personal"
    section: str = "custom"
    completed: bool = False
    is_default: bool = False
    is_manual: bool = True
    created_at: str | None = None  # ISO timestamp, manual tasks only

    @property
    def identity(self) -> Identity:
        return TaskId(self.id) if self.id else TitleKey(self.title)

    @property
    def ref(self) -> str:
        """Plain string form of the identity, as handed out to callers."""
        return self.identity.value

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        # Older snapshots only carry one of the two flags.
        if "isManual" in d:
            is_manual = bool(d["isManual"])
        else:
            is_manual = not bool(d.get("isDefault", False))
        return cls(
            id=str(d.get("id", "") or ""),
            title=str(d.get("title", "")),
            description=str(d.get("description", "") or ""),
            time=str(d.get("time", "") or "00:00"),
            category=str(d.get("category", "personal")),
            section=str(d.get("section", "custom")),
            completed=bool(d.get("completed", False)),
            is_default=not is_manual,
            is_manual=is_manual,
            created_at=d.get("createdAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.id:
            d["id"] = self.id
        d.update({
            "title": self.title,
            "time": self.time,
            "category": self.category,
            "section": self.section,
            "completed": self.completed,
            "isDefault": self.is_default,
            "isManual": self.is_manual,
        })
        if self.description:
            d["description"] = self.description
        if self.created_at:
            d["createdAt"] = self.created_at
        return d


@dataclass
class TaskDraft:
    """User input for a new manual task."""

    title: str = ""
    category: str = ""
    time: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TaskDraft:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            title=str(d.get("title", "") or ""),
            category=str(d.get("category", d.get("type", "")) or ""),
            time=str(d.get("time", "") or ""),
            description=str(d.get("description", "") or ""),
        )


# ── Days ──────────────────────────────────────────────────────


@dataclass
class DaySections:
    essential: list[Task] = field(default_factory=list)
    morning: list[Task] = field(default_factory=list)
    work: list[Task] = field(default_factory=list)
    evening: list[Task] = field(default_factory=list)
    custom: list[Task] = field(default_factory=list)

    def section(self, name: str) -> list[Task] | None:
        if name not in SECTIONS:
            return None
        return getattr(self, name)

    def items(self) -> Iterator[tuple[str, list[Task]]]:
        for name in SECTIONS:
            yield name, getattr(self, name)

    def all_tasks(self) -> list[Task]:
        return [t for _name, tasks in self.items() for t in tasks]

    def counts(self) -> tuple[int, int]:
        """Return (completed, total) over all five sections."""
        tasks = self.all_tasks()
        return sum(1 for t in tasks if t.completed), len(tasks)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DaySections:
        if not d or not isinstance(d, dict):
            return cls()
        kwargs = {}
        for name in SECTIONS:
            kwargs[name] = [Task.from_dict(t) for t in (d.get(name) or []) if isinstance(t, dict)]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {name: [t.to_dict() for t in tasks] for name, tasks in self.items()}


# ── Stats & snapshot ──────────────────────────────────────────


@dataclass
class Stats:
    total_completed: int = 0
    current_streak: int = 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Stats:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            total_completed=max(0, int(d.get("totalCompleted", 0) or 0)),
            current_streak=max(0, int(d.get("currentStreak", 0) or 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"totalCompleted": self.total_completed, "currentStreak": self.current_streak}


@dataclass
class StoreSnapshot:
    tasks: dict[str, DaySections] = field(default_factory=dict)
    custom_tasks: list[Task] = field(default_factory=list)
    reflections: dict[str, str] = field(default_factory=dict)
    stats: Stats = field(default_factory=Stats)
    # Top-level keys this version does not know about, written back untouched.
    extra: dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = ("tasks", "customTasks", "reflections", "stats")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> StoreSnapshot:
        if not d or not isinstance(d, dict):
            return cls()
        raw_days = d.get("tasks") or {}
        raw_reflections = d.get("reflections") or {}
        if not isinstance(raw_days, dict) or not isinstance(raw_reflections, dict):
            raise ValueError("tasks and reflections must be objects keyed by date")
        days = {}
        for key, sections in raw_days.items():
            if isinstance(sections, dict):
                days[str(key)] = DaySections.from_dict(sections)
        reflections = {str(k): str(v) for k, v in raw_reflections.items() if v is not None}
        return cls(
            tasks=days,
            custom_tasks=[Task.from_dict(t) for t in (d.get("customTasks") or []) if isinstance(t, dict)],
            reflections=reflections,
            stats=Stats.from_dict(d.get("stats") or {}),
            extra={k: v for k, v in d.items() if k not in cls.KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = dict(self.extra)
        d.update({
            "tasks": {k: v.to_dict() for k, v in self.tasks.items()},
            "customTasks": [t.to_dict() for t in self.custom_tasks],
            "reflections": dict(self.reflections),
            "stats": self.stats.to_dict(),
        })
        return d


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    timezone: str = ""  # empty: system local time
    max_streak_lookback_days: int = 3660
    log_level: str = "INFO"
    export_dir: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        try:
            lookback = int(d.get("max_streak_lookback_days", 3660))
        except (TypeError, ValueError):
            lookback = 3660
        return cls(
            timezone=str(d.get("timezone", "") or ""),
            max_streak_lookback_days=max(1, lookback),
            log_level=str(d.get("log_level", "INFO") or "INFO").upper(),
            export_dir=str(d.get("export_dir", "") or ""),
        )

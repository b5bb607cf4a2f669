"""Process-wide store: owns the DayStore, manual-task registry, reflections and stats.

Lifecycle is load-at-start, save-on-every-mutation. The store object is
passed explicitly to every core function; there is no module-level instance.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from planner.fileio import dump_json, read_json, remove_file, write_text_atomic
from planner.models import DaySections, Settings, Stats, StoreSnapshot, Task
from planner.workspace import data_path, exports_dir, load_settings, workspace_root

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "task-planner-backup"


def export_filename(key: str) -> str:
    return f"{EXPORT_PREFIX}-{key}.json"


def snapshot_from_text(text: str) -> StoreSnapshot:
    """Parse serialized store text. Raises ValueError on malformed input."""
    if not text.strip():
        return StoreSnapshot()
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("snapshot must be a JSON object")
    return StoreSnapshot.from_dict(data)


class PlannerStore:
    def __init__(
        self,
        path: Path | None = None,
        settings: Settings | None = None,
        snapshot: StoreSnapshot | None = None,
    ) -> None:
        self.path = path
        self.settings = settings or Settings()
        self.snapshot = snapshot or StoreSnapshot()
        self.last_save_error: str | None = None

    # ── Construction ──────────────────────────────────────────

    @classmethod
    def open(cls, root: Path | None = None) -> PlannerStore:
        """Load the workspace's store (settings from config.yaml)."""
        if root is None:
            root = workspace_root()
        store = cls(path=data_path(root), settings=load_settings(root))
        store.load()
        return store

    @classmethod
    def from_text(
        cls,
        text: str,
        path: Path | None = None,
        settings: Settings | None = None,
    ) -> PlannerStore:
        """Build a store from serialized text, e.g. a previous export."""
        return cls(path=path, settings=settings, snapshot=snapshot_from_text(text))

    # ── Accessors ─────────────────────────────────────────────

    @property
    def days(self) -> dict[str, DaySections]:
        return self.snapshot.tasks

    @property
    def custom_tasks(self) -> list[Task]:
        return self.snapshot.custom_tasks

    @property
    def reflections(self) -> dict[str, str]:
        return self.snapshot.reflections

    @property
    def stats(self) -> Stats:
        return self.snapshot.stats

    # ── Persistence ───────────────────────────────────────────

    def load(self) -> bool:
        """Replace in-memory state with the persisted snapshot.

        Returns True if a snapshot was found. A missing, unreadable or corrupt
        file leaves an empty store.
        """
        self.snapshot = StoreSnapshot()
        if self.path is None or not self.path.exists():
            return False
        try:
            data = read_json(self.path)
            self.snapshot = StoreSnapshot.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load %s, starting empty: %s", self.path, e)
            self.snapshot = StoreSnapshot()
            return False
        logger.debug("Loaded %d day(s) from %s", len(self.snapshot.tasks), self.path)
        return bool(data)

    def save(self) -> bool:
        """Persist the snapshot once. On failure memory stays authoritative."""
        if self.path is None:
            return True
        try:
            write_text_atomic(self.path, self.serialize())
        except OSError as e:
            self.last_save_error = str(e)
            logger.error("Failed to save %s: %s", self.path, e)
            return False
        self.last_save_error = None
        return True

    def serialize(self) -> str:
        return dump_json(self.snapshot.to_dict())

    def export_to(self, key: str, directory: Path | None = None) -> Path:
        """Write a backup named after *key*. OSError propagates to the caller."""
        if directory is None:
            root = self.path.parent.parent if self.path is not None else workspace_root()
            directory = exports_dir(root, self.settings)
        target = directory / export_filename(key)
        write_text_atomic(target, self.serialize())
        logger.info("Exported store to %s", target)
        return target

    def reset(self) -> None:
        """Clear all state, in memory and on disk."""
        self.snapshot = StoreSnapshot()
        self.last_save_error = None
        if self.path is not None:
            try:
                remove_file(self.path)
            except OSError as e:
                self.last_save_error = str(e)
                logger.error("Failed to remove %s: %s", self.path, e)
        logger.info("Store reset")

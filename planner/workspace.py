"""Workspace root, settings and path helpers for DayPlanner."""

from __future__ import annotations

import logging
import os
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from planner.fileio import read_yaml
from planner.models import Settings

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the workspace root directory (holds config.yaml, data/ and exports/)."""
    return Path(
        os.environ.get("PLANNER_ROOT", str(Path.home() / "planner"))
    ).expanduser().resolve()


def load_settings(root: Path | None = None) -> Settings:
    """Read config.yaml, falling back to defaults when missing or malformed."""
    if root is None:
        root = workspace_root()
    try:
        return Settings.from_dict(read_yaml(config_path(root)))
    except yaml.YAMLError as e:
        logger.warning("Ignoring malformed %s: %s", config_path(root), e)
        return Settings()


def local_timezone(settings: Settings | None = None) -> tzinfo | None:
    """The zone that defines the local calendar day, None for system local time."""
    if settings is None or not settings.timezone:
        return None
    try:
        return ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r in config, using system local time", settings.timezone)
        return None


def now_local(settings: Settings | None = None) -> datetime:
    tz = local_timezone(settings)
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


# ── Path helpers ──────────────────────────────────────────────

def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "config.yaml"


def data_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "data" / "planner.json"


def exports_dir(root: Path | None = None, settings: Settings | None = None) -> Path:
    if root is None:
        root = workspace_root()
    if settings is not None and settings.export_dir:
        return Path(settings.export_dir).expanduser()
    return root / "exports"

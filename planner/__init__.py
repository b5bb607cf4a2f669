"""DayPlanner core library: daily task sections, completion state and streaks.

Public API re-exports for convenient imports:
    from planner import PlannerStore, dispatch, day_view, ...
"""

# Workspace & paths
from planner.workspace import (
    workspace_root,
    load_settings,
    now_local,
    config_path,
    data_path,
    exports_dir,
)

# Date keys
from planner.datekey import (
    to_key,
    from_key,
    today_key,
    shift_key,
    iter_keys,
)

# Errors
from planner.errors import (
    PlannerError,
    ValidationError,
    NotFoundError,
    PermissionDeniedError,
)

# Store
from planner.store import PlannerStore, export_filename, snapshot_from_text

# Catalog & days
from planner.catalog import section_for_category, default_sections
from planner.days import ensure_day, get_day

# Tasks
from planner.tasks import (
    add_task,
    toggle_task,
    delete_task,
    sort_for_display,
    section_badges,
    find_manual_task,
    normalize_time,
)

# Analytics
from planner.analytics import (
    day_completion,
    week_completion,
    month_completion,
    streak,
    refresh_stats,
    week_overview,
    month_summary,
    month_calendar,
)

# Reflections
from planner.reflections import get_reflection, save_reflection, reflections_markdown

# Views & commands
from planner.views import day_view, week_view, month_view
from planner.commands import ACTIONS, dispatch

# Models
from planner.models import (
    SECTIONS,
    CATEGORIES,
    TaskId,
    TitleKey,
    Task,
    TaskDraft,
    DaySections,
    Stats,
    StoreSnapshot,
    Settings,
)

#!/usr/bin/env python3
"""DayPlanner TUI: interactive daily task tracker powered by Textual."""

from __future__ import annotations

import sys
from typing import Any

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Checkbox,
    Footer,
    Header,
    Input,
    Label,
    Static,
    TextArea,
)

from planner import (
    SECTIONS,
    PlannerStore,
    dispatch,
    load_settings,
    shift_key,
    today_key,
    workspace_root,
)
from planner.logging_config import configure_logging


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
}

#left-pane {
    width: 3fr;
    min-width: 40;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#right-pane {
    width: 2fr;
    min-width: 30;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.task-row {
    height: auto;
}

.task-row Checkbox {
    width: 1fr;
    height: auto;
}

.task-done {
    opacity: 50%;
}

.task-category {
    width: auto;
    color: $text-muted;
    padding: 0 1;
}

.manual Checkbox {
    text-style: bold;
}

#add-row {
    height: auto;
}

#add-title {
    width: 2fr;
}

#add-category, #add-time {
    width: 1fr;
}

#reflection-area {
    height: 1fr;
    min-height: 6;
}

#stats-bar {
    dock: bottom;
    height: 1;
    background: $primary-background;
    color: $text-muted;
    padding: 0 2;
}
"""


# ── Custom widgets ─────────────────────────────────────────────


class TaskRow(Horizontal):
    """One task: checkbox with time + title, category tag."""

    def __init__(self, section: str, task: dict[str, Any], **kwargs) -> None:
        super().__init__(**kwargs)
        self.section = section
        self.ref = task["ref"]
        self.is_manual = task["isManual"]
        self.task_data = task

    def compose(self) -> ComposeResult:
        t = self.task_data
        marker = "+ " if self.is_manual else ""
        yield Checkbox(Text(f"{t['time']}  {marker}{t['title']}"), value=t["completed"])
        yield Label(Text(t["category"]), classes="task-category")

    def on_mount(self) -> None:
        self.add_class("task-row")
        if self.is_manual:
            self.add_class("manual")
        if self.task_data["completed"]:
            self.add_class("task-done")


# ── Main app ───────────────────────────────────────────────────


class DayPlannerApp(App):
    """DayPlanner: today's sections, quick add, reflection and streaks."""

    TITLE = "DayPlanner"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("p", "prev_day", "Prev day"),
        Binding("n", "next_day", "Next day"),
        Binding("t", "goto_today", "Today"),
        Binding("a", "focus_add", "Add"),
        Binding("x", "delete_task", "Delete"),
        Binding("r", "focus_reflection", "Reflect"),
        Binding("ctrl+s", "save_reflection", "Save reflection"),
        Binding("e", "export", "Export"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self, store: PlannerStore) -> None:
        super().__init__()
        self.store = store
        self.key = today_key(store.settings)

    def compose(self) -> ComposeResult:
        yield Header()
        sections = []
        for name in SECTIONS:
            sections.append(Label(name.title(), id=f"title-{name}", classes="section-title"))
            sections.append(Vertical(id=f"list-{name}"))
        yield Horizontal(
            VerticalScroll(*sections, id="left-pane", can_focus=False),
            Vertical(
                Label("Quick add", classes="section-title"),
                Horizontal(
                    Input(placeholder="title (enter to add)", id="add-title"),
                    Input(placeholder="category", id="add-category"),
                    Input(placeholder="HH:MM", id="add-time"),
                    id="add-row",
                ),
                Label("Reflection", classes="section-title"),
                TextArea(id="reflection-area"),
                id="right-pane",
            ),
            id="main-layout",
        )
        yield Static(id="stats-bar")
        yield Footer()

    def on_mount(self) -> None:
        self._load_day()

    # ── Rendering ──────────────────────────────────────────────

    def _run(self, action: str, **payload: Any) -> dict[str, Any]:
        payload.setdefault("date", self.key)
        outcome = dispatch(self.store, action, payload)
        if not outcome["ok"]:
            self.notify(outcome["reason"], title="Not done", severity="warning")
        elif outcome.get("warning"):
            self.notify(outcome["warning"], title="Not saved", severity="error")
        return outcome

    def _load_day(self) -> None:
        outcome = self._run("select_date")
        if not outcome["ok"]:
            return
        view = outcome["day"]
        for name in SECTIONS:
            container = self.query_one(f"#list-{name}", Vertical)
            container.remove_children()
            for task in view["sections"][name]:
                container.mount(TaskRow(name, task))
        self.query_one("#reflection-area", TextArea).load_text(view["reflection"])
        self._update_summary(view)

    def _update_summary(self, view: dict[str, Any]) -> None:
        for name in SECTIONS:
            badge = view["badges"][name]
            text = f"{name.title()}  {badge['completed']}/{badge['total']}"
            if badge["manualCount"]:
                text += f"  ({badge['manualCount']} custom)"
            self.query_one(f"#title-{name}", Label).update(text)
        self.sub_title = view["date"]
        self.query_one("#stats-bar", Static).update(
            f"Today {view['dayCompletion']}%   Week {view['weekCompletion']}%   "
            f"Month {view['monthCompletion']}%   Streak {view['currentStreak']}   "
            f"Completed {view['totalCompleted']}"
        )

    # ── Events ─────────────────────────────────────────────────

    @on(Checkbox.Changed)
    def _on_checkbox_toggle(self, event: Checkbox.Changed) -> None:
        row = event.checkbox.parent
        if not isinstance(row, TaskRow):
            return
        outcome = self._run("toggle_task", section=row.section, ref=row.ref)
        if not outcome["ok"]:
            return
        if outcome["task"]["completed"]:
            row.add_class("task-done")
            self.notify(outcome["message"], severity="information")
        else:
            row.remove_class("task-done")
        self._update_summary(outcome["day"])

    @on(Input.Submitted)
    def _on_add_submitted(self, event: Input.Submitted) -> None:
        title_input = self.query_one("#add-title", Input)
        category_input = self.query_one("#add-category", Input)
        time_input = self.query_one("#add-time", Input)
        outcome = self._run(
            "add_task",
            title=title_input.value,
            category=category_input.value,
            time=time_input.value,
        )
        if not outcome["ok"]:
            return
        for widget in (title_input, category_input, time_input):
            widget.value = ""
        self.notify(outcome["message"], severity="information")
        self._load_day()

    # ── Actions ────────────────────────────────────────────────

    def _goto(self, key: str) -> None:
        self.key = key
        self.set_focus(None)
        self._load_day()

    def action_prev_day(self) -> None:
        self._goto(shift_key(self.key, -1))

    def action_next_day(self) -> None:
        self._goto(shift_key(self.key, 1))

    def action_goto_today(self) -> None:
        self._goto(today_key(self.store.settings))

    def action_focus_add(self) -> None:
        self.query_one("#add-title", Input).focus()

    def action_focus_reflection(self) -> None:
        self.query_one("#reflection-area", TextArea).focus()

    def action_delete_task(self) -> None:
        focused = self.focused
        row = focused.parent if focused is not None else None
        if not isinstance(row, TaskRow):
            self.notify("Select a task first.", severity="warning")
            return
        outcome = self._run("delete_task", section=row.section, ref=row.ref)
        if outcome["ok"]:
            self.notify(outcome["message"], severity="information")
            self._load_day()

    def action_save_reflection(self) -> None:
        text = self.query_one("#reflection-area", TextArea).text
        outcome = self._run("save_reflection", text=text)
        if outcome["ok"]:
            self.notify(outcome["message"], severity="information")

    def action_export(self) -> None:
        outcome = self._run("export", write=True)
        if outcome["ok"]:
            self.notify(f"Saved {outcome['path']}", title=outcome["message"], severity="information")

    def action_blur_focus(self) -> None:
        self.set_focus(None)

    def action_quit_app(self) -> None:
        self.exit()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set PLANNER_ROOT or create the directory first.")
        sys.exit(1)

    # The screen belongs to Textual; log to a file instead of stderr.
    configure_logging(load_settings(root), filename=root / "logs" / "dayplanner.log")
    app = DayPlannerApp(PlannerStore.open(root))
    app.run()


if __name__ == "__main__":
    main()

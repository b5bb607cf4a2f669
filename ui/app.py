from __future__ import annotations

import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from planner import (
    SECTIONS,
    PlannerStore,
    day_view,
    dispatch,
    export_filename,
    from_key,
    load_settings,
    month_view,
    reflections_markdown,
    today_key,
    week_view,
    workspace_root,
)
from planner.errors import ValidationError
from planner.logging_config import configure_logging

configure_logging(load_settings())


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _render_day(view: dict[str, Any]) -> str:
    parts = [
        f"<h1>{_escape(view['date'])}</h1>",
        '<p class="stats">'
        f"Today {view['dayCompletion']}% &middot; Week {view['weekCompletion']}% &middot; "
        f"Month {view['monthCompletion']}% &middot; Streak {view['currentStreak']} &middot; "
        f"Completed {view['totalCompleted']}</p>",
    ]
    for name in SECTIONS:
        badge = view["badges"][name]
        parts.append(f"<h2>{name.title()} <small>{badge['completed']}/{badge['total']}</small></h2>")
        rows = []
        for t in view["sections"][name]:
            mark = "x" if t["completed"] else " "
            who = "manual" if t["isManual"] else "default"
            rows.append(
                f'<li class="{who}">[{mark}] <span class="time">{_escape(t["time"])}</span> '
                f'{_escape(t["title"])} <span class="cat">{_escape(t["category"])}</span></li>'
            )
        parts.append("<ul>" + "".join(rows) + "</ul>" if rows else '<p class="muted">(empty)</p>')
    parts.append("<h2>Reflection</h2>")
    parts.append(f'<pre class="mono">{_escape(view["reflection"] or "(none)")}</pre>')
    return "\n".join(parts)


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="DayPlanner", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("PLANNER_USERNAME", "")
    expected_password = os.environ.get("PLANNER_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def get_store() -> PlannerStore:
    return PlannerStore.open(workspace_root())


_STATUS_BY_KIND = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "permission": status.HTTP_403_FORBIDDEN,
}


def _run(store: PlannerStore, action: str, payload: dict[str, Any]) -> dict[str, Any]:
    outcome = dispatch(store, action, payload)
    if not outcome["ok"]:
        code = _STATUS_BY_KIND.get(outcome["error"], status.HTTP_500_INTERNAL_SERVER_ERROR)
        raise HTTPException(status_code=code, detail=outcome["reason"])
    return outcome


def _key_or_today(store: PlannerStore, key: str | None) -> str:
    if not key:
        return today_key(store.settings)
    try:
        from_key(key)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return key


# ── Pages ─────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user), store: PlannerStore = Depends(get_store)) -> HTMLResponse:
    outcome = _run(store, "select_date", {})
    body = _render_day(outcome["day"])
    return HTMLResponse(f"<!doctype html><html><head><title>DayPlanner</title></head><body>{body}</body></html>")


@app.get("/raw/reflections")
def raw_reflections(username: str = Depends(get_current_user), store: PlannerStore = Depends(get_store)) -> PlainTextResponse:
    return PlainTextResponse(reflections_markdown(store))


# ── Views ─────────────────────────────────────────────────────

@app.get("/api/day")
def api_today(username: str = Depends(get_current_user), store: PlannerStore = Depends(get_store)) -> dict[str, Any]:
    return _run(store, "select_date", {"date": today_key(store.settings)})["day"]


@app.get("/api/day/{key}")
def api_day(
    key: str,
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    """Day view; the day is created with default tasks on first access."""
    key = _key_or_today(store, key)
    return _run(store, "select_date", {"date": key})["day"]


@app.get("/api/week")
def api_week(
    date: str | None = None,
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    return week_view(store, _key_or_today(store, date))


@app.get("/api/month")
def api_month(
    date: str | None = None,
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    return month_view(store, _key_or_today(store, date), today_key(store.settings))


@app.get("/api/stats")
def api_stats(username: str = Depends(get_current_user), store: PlannerStore = Depends(get_store)) -> dict[str, Any]:
    return store.stats.to_dict()


# ── Mutations ─────────────────────────────────────────────────

@app.post("/api/tasks")
def api_add_task(
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    """Add a manual task: {title, category, time?, description?, date?}."""
    return _run(store, "add_task", payload)


@app.post("/api/tasks/{key}/{section}/{ref}/toggle")
def api_toggle_task(
    key: str,
    section: str,
    ref: str,
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    return _run(store, "toggle_task", {"date": key, "section": section, "ref": ref})


@app.delete("/api/tasks/{key}/{section}/{ref}")
def api_delete_task(
    key: str,
    section: str,
    ref: str,
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    return _run(store, "delete_task", {"date": key, "section": section, "ref": ref})


@app.put("/api/reflections/{key}")
def api_save_reflection(
    key: str,
    payload: dict[str, Any] = Body(...),
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    return _run(store, "save_reflection", {"date": key, "text": payload.get("text", "")})


@app.get("/api/export")
def api_export(username: str = Depends(get_current_user), store: PlannerStore = Depends(get_store)) -> Response:
    key = today_key(store.settings)
    return Response(
        content=store.serialize(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(key)}"'},
    )


@app.post("/api/reset")
def api_reset(
    payload: dict[str, Any] = Body(default={}),
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    """Delete all data. Body must be {"confirm": true}."""
    return _run(store, "reset", payload)


@app.post("/api/actions/{action}")
def api_action(
    action: str,
    payload: dict[str, Any] = Body(default={}),
    username: str = Depends(get_current_user),
    store: PlannerStore = Depends(get_store),
) -> dict[str, Any]:
    """Raw access to the action dispatch table."""
    return _run(store, action, payload)

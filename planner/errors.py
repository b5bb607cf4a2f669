"""Recoverable error kinds raised by the planner core.

None of these are fatal: the command dispatcher and the HTTP layer turn them
into failure outcomes and the caller shows a transient notice.
"""

from __future__ import annotations

from typing import Any


class PlannerError(Exception):
    kind = "error"

    def to_outcome(self) -> dict[str, Any]:
        return {"ok": False, "error": self.kind, "reason": str(self)}


class ValidationError(PlannerError):
    """Missing or malformed input, e.g. an empty title."""

    kind = "validation"


class NotFoundError(PlannerError):
    """Toggle/delete target (day, section or task) does not exist."""

    kind = "not_found"


class PermissionDeniedError(PlannerError):
    """Attempt to delete a default (catalog) task."""

    kind = "permission"

"""Response shaping: secret stripping, summaries and JSON serialization.

Every Project-shaped payload that leaves the server goes through
:func:`sanitize_project` (or :func:`summarize_project`), so the project
``token`` is never exposed to agents.
"""

from __future__ import annotations

import json
from typing import Any

from honeybadger_mcp.hbapi.types import ProjectSummary

SECRET_PROJECT_FIELDS = frozenset({"token"})

PROJECT_SUMMARY_FIELDS = (
    "id",
    "name",
    "active",
    "created_at",
    "last_notice_at",
    "fault_count",
    "unresolved_fault_count",
)

_TRACE_KEYS = ("backtrace", "application_trace")


def to_json(payload: Any) -> str:
    """Serialize a payload for an MCP text result.

    Raises ``TypeError``/``ValueError`` for payloads that cannot be encoded
    (circular references, non-finite floats).
    """
    return json.dumps(payload, indent=2, allow_nan=False)


def sanitize_project(project: Any) -> Any:
    """Return a copy of *project* without secret fields."""
    if not isinstance(project, dict):
        return project
    return {k: v for k, v in project.items() if k not in SECRET_PROJECT_FIELDS}


def summarize_project(project: dict[str, Any]) -> ProjectSummary:
    return ProjectSummary(
        id=project.get("id"),
        name=project.get("name"),
        active=project.get("active"),
        created_at=project.get("created_at"),
        last_notice_at=project.get("last_notice_at"),
        fault_count=project.get("fault_count"),
        unresolved_fault_count=project.get("unresolved_fault_count"),
    )


def summarize_projects(envelope: Any) -> Any:
    """Reduce each entry of a ``{results, links}`` project list to its summary.

    The envelope itself (``links`` and any other top-level keys) is kept.
    """
    if not isinstance(envelope, dict):
        return envelope
    results = envelope.get("results") or []
    shaped = dict(envelope)
    shaped["results"] = [summarize_project(p) if isinstance(p, dict) else p for p in results]
    shaped.setdefault("links", {})
    return shaped


def normalize_line_number(value: Any) -> int | None:
    """Backtrace line numbers arrive as ints or numeric strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_notice(notice: Any) -> Any:
    if not isinstance(notice, dict):
        return notice
    shaped = dict(notice)
    for key in _TRACE_KEYS:
        entries = shaped.get(key)
        if not isinstance(entries, list):
            continue
        shaped[key] = [
            {**entry, "number": normalize_line_number(entry.get("number"))} if isinstance(entry, dict) else entry
            for entry in entries
        ]
    return shaped


def normalize_notices(envelope: Any) -> Any:
    if not isinstance(envelope, dict) or not isinstance(envelope.get("results"), list):
        return envelope
    shaped = dict(envelope)
    shaped["results"] = [normalize_notice(n) for n in envelope["results"]]
    return shaped

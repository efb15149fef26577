"""Pure helpers shared across MCP tool modules.

This module has NO dependency on ``mcp_server`` module globals, so it can
be imported freely without triggering circular-import issues.

Argument accessors follow one convention: a missing or wrongly-typed value
yields the default (``0``, ``""``, ``False``), and handlers treat the
default of a required parameter as "missing".
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from mcp.types import CallToolResult, TextContent, ToolAnnotations

from honeybadger_mcp.hbapi.errors import RequestError
from honeybadger_mcp.shaping import to_json

logger = logging.getLogger(__name__)

MARSHAL_FAILURE = "Failed to marshal response"

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False)
DESTRUCTIVE = ToolAnnotations(readOnlyHint=False, destructiveHint=True)


def _id_param(description: str) -> dict[str, Any]:
    return {"type": "integer", "minimum": 1, "description": description}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _text(content: object) -> list[TextContent]:
    if isinstance(content, str):
        return [TextContent(type="text", text=content)]
    return [TextContent(type="text", text=to_json(content))]


def _error(message: str) -> CallToolResult:
    return CallToolResult(content=_text(message), isError=True)


def _result(payload: object) -> CallToolResult:
    """JSON-encode *payload* into a single text item."""
    try:
        content = _text(payload)
    except (TypeError, ValueError):
        logger.error("marshal_failed", exc_info=True)
        return _error(MARSHAL_FAILURE)
    return CallToolResult(content=content, isError=False)


def _api_error(action: str, exc: RequestError) -> CallToolResult:
    """``Failed to <action>: <cause>``; the status is only logged."""
    logger.warning(
        "api_error",
        extra={"error": f"{exc.code}: {exc.message}", "status": exc.status_code, "args_data": {"action": action}},
    )
    return _error(f"Failed to {action}: {exc.message}")


def _missing(name: str) -> CallToolResult:
    return _error(f"{name} is required")


# ---------------------------------------------------------------------------
# Argument accessors
# ---------------------------------------------------------------------------


def _get_int(arguments: dict[str, Any], name: str, default: int = 0) -> int:
    value = arguments.get(name)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _get_string(arguments: dict[str, Any], name: str, default: str = "") -> str:
    value = arguments.get(name)
    return value if isinstance(value, str) else default


def _get_bool(arguments: dict[str, Any], name: str, default: bool = False) -> bool:
    value = arguments.get(name)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        return default
    if isinstance(value, int | float):
        return value != 0
    return default


def _get_optional_bool(arguments: dict[str, Any], name: str) -> tuple[bool | None, CallToolResult | None]:
    """``(None, None)`` when absent, so PUT bodies can tell "unset" from ``false``.

    A present value that is not a boolean is an error, never a silent ``false``.
    """
    value = arguments.get(name)
    if value is None:
        return None, None
    if isinstance(value, bool):
        return value, None
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true", None
    return None, _error(f"{name} must be a boolean")


def _get_optional_int(arguments: dict[str, Any], name: str) -> tuple[int | None, CallToolResult | None]:
    value = arguments.get(name)
    if value is None:
        return None, None
    if isinstance(value, int) and not isinstance(value, bool):
        return value, None
    if isinstance(value, float) and value.is_integer():
        return int(value), None
    if isinstance(value, str) and value.isascii():
        try:
            return int(value.strip()), None
        except ValueError:
            pass
    return None, _error(f"{name} must be an integer")


def _get_optional_string(arguments: dict[str, Any], name: str) -> str | None:
    value = arguments.get(name)
    return value if isinstance(value, str) else None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_int_range(
    value: int,
    name: str,
    min_val: int | None = None,
    max_val: int | None = None,
) -> CallToolResult | None:
    """Return a validation error if *value* is set (non-zero) and outside range."""
    if value == 0:
        return None
    if min_val is not None and value < min_val:
        return _error(f"{name} must be >= {min_val}")
    if max_val is not None and value > max_val:
        return _error(f"{name} must be <= {max_val}")
    return None


def _validate_choice(value: str, name: str, choices: tuple[str, ...]) -> CallToolResult | None:
    if value and value not in choices:
        return _error(f"{name} must be one of: {', '.join(choices)}")
    return None


def _require_id(arguments: dict[str, Any], name: str = "project_id") -> tuple[int, CallToolResult | None]:
    """Return ``(id, None)`` or ``(0, error_result)``."""
    value = _get_int(arguments, name)
    if value == 0:
        return 0, _missing(name)
    if value < 0:
        return 0, _error(f"{name} must be >= 1")
    return value, None


def _from_epoch(value: int | float | str) -> datetime | None:
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None


def _parse_timestamp(arguments: dict[str, Any], name: str, *, allow_epoch: bool = False) -> datetime | None:
    """Parse an optional RFC 3339 timestamp argument.

    With *allow_epoch*, decimal Unix seconds (as a string or a number) are
    accepted too.  Empty means unset; an unparseable or out-of-range value
    is also treated as unset and logged.
    """
    raw = arguments.get(name)
    if raw is None or raw == "":
        return None
    parsed: datetime | None = None
    if allow_epoch and isinstance(raw, int | float) and not isinstance(raw, bool):
        parsed = _from_epoch(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if allow_epoch and text.isascii() and text.isdigit():
            parsed = _from_epoch(text)
        elif "T" in text.upper():
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                parsed = None
            if parsed is not None and parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
    if parsed is None:
        logger.warning("ignoring_invalid_timestamp", extra={"args_data": {name: raw}})
    return parsed


def _parse_json_param(arguments: dict[str, Any], name: str, expected: type) -> tuple[Any, CallToolResult | None]:
    """Decode a JSON-encoded string argument into *expected* (list or dict)."""
    raw = arguments.get(name)
    if isinstance(raw, expected):
        # Some clients send the decoded value despite the string schema.
        return raw, None
    if not isinstance(raw, str):
        return None, _error(f"Failed to parse {name} JSON: expected a JSON string")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        return None, _error(f"Failed to parse {name} JSON: {exc}")
    if not isinstance(value, expected):
        kind = "array" if expected is list else "object"
        return None, _error(f"Failed to parse {name} JSON: expected a JSON {kind}")
    return value, None

"""MCP tools for faults: lists, details, notices, affected users and counts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import CallToolResult, Tool

from honeybadger_mcp.hbapi.errors import RequestError
from honeybadger_mcp.hbapi.types import FAULT_ORDERS, MAX_PAGE_SIZE, FaultListNoticesOptions, FaultListOptions
from honeybadger_mcp.mcp_tools.common import (
    READ_ONLY,
    _api_error,
    _get_int,
    _get_string,
    _id_param,
    _parse_timestamp,
    _require_id,
    _result,
    _validate_choice,
    _validate_int_range,
)
from honeybadger_mcp.shaping import normalize_notices

_TIMESTAMP_HINT = " (RFC 3339, or Unix seconds)"


def _fault_filters(noun: str) -> dict[str, Any]:
    return {
        "q": {"type": "string", "description": f"Search string to filter {noun}"},
        "created_after": {
            "type": "string",
            "description": f"Filter {noun} created after this timestamp{_TIMESTAMP_HINT}",
        },
        "occurred_after": {
            "type": "string",
            "description": f"Filter {noun} that occurred after this timestamp{_TIMESTAMP_HINT}",
        },
        "occurred_before": {
            "type": "string",
            "description": f"Filter {noun} that occurred before this timestamp{_TIMESTAMP_HINT}",
        },
    }


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for fault tools."""
    tools = [
        Tool(
            name="list_faults",
            description="Get a list of faults for a project with optional filtering and ordering",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project to get faults for"),
                    **_fault_filters("faults"),
                    "limit": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": MAX_PAGE_SIZE,
                        "description": f"Maximum number of faults to return (max {MAX_PAGE_SIZE})",
                    },
                    "order": {
                        "type": "string",
                        "enum": list(FAULT_ORDERS),
                        "description": "Order results by 'recent' or 'frequent'",
                    },
                    "page": {"type": "integer", "minimum": 1, "description": "Page number for pagination"},
                },
                "required": ["project_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_fault",
            description="Get detailed information for a specific fault in a project",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project containing the fault"),
                    "fault_id": _id_param("The ID of the fault to retrieve"),
                },
                "required": ["project_id", "fault_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="list_fault_notices",
            description="Get a list of notices (individual error events) for a specific fault",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project containing the fault"),
                    "fault_id": _id_param("The ID of the fault to get notices for"),
                    "created_after": {
                        "type": "string",
                        "description": f"Filter notices created after this timestamp{_TIMESTAMP_HINT}",
                    },
                    "created_before": {
                        "type": "string",
                        "description": f"Filter notices created before this timestamp{_TIMESTAMP_HINT}",
                    },
                    "limit": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": MAX_PAGE_SIZE,
                        "description": f"Maximum number of notices to return (max {MAX_PAGE_SIZE})",
                    },
                },
                "required": ["project_id", "fault_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="list_fault_affected_users",
            description="Get a list of users who were affected by a specific fault with occurrence counts",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project containing the fault"),
                    "fault_id": _id_param("The ID of the fault to get affected users for"),
                    "q": {"type": "string", "description": "Search string to filter affected users"},
                },
                "required": ["project_id", "fault_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_fault_counts",
            description="Get fault count statistics for a project with optional filtering",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project to get fault counts for"),
                    **_fault_filters("faults"),
                },
                "required": ["project_id"],
            },
            annotations=READ_ONLY,
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "list_faults": _handle_list_faults,
        "get_fault": _handle_get_fault,
        "list_fault_notices": _handle_list_fault_notices,
        "list_fault_affected_users": _handle_list_fault_affected_users,
        "get_fault_counts": _handle_get_fault_counts,
    }

    return tools, handlers


def _list_options(arguments: dict[str, Any]) -> FaultListOptions:
    return FaultListOptions(
        q=_get_string(arguments, "q"),
        created_after=_parse_timestamp(arguments, "created_after", allow_epoch=True),
        occurred_after=_parse_timestamp(arguments, "occurred_after", allow_epoch=True),
        occurred_before=_parse_timestamp(arguments, "occurred_before", allow_epoch=True),
        limit=_get_int(arguments, "limit"),
        order=_get_string(arguments, "order"),
        page=_get_int(arguments, "page"),
    )


def _require_fault(arguments: dict[str, Any]) -> tuple[int, int, CallToolResult | None]:
    project_id, err = _require_id(arguments)
    if err:
        return 0, 0, err
    fault_id, err = _require_id(arguments, "fault_id")
    if err:
        return 0, 0, err
    return project_id, fault_id, None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_list_faults(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    options = _list_options(arguments)
    err = (
        _validate_int_range(options.limit, "limit", 1, MAX_PAGE_SIZE)
        or _validate_int_range(options.page, "page", 1)
        or _validate_choice(options.order, "order", FAULT_ORDERS)
    )
    if err:
        return err
    try:
        faults = await _get_client().faults.list_faults(project_id, options)
    except RequestError as e:
        return _api_error("list faults", e)
    return _result(faults)


async def _handle_get_fault(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, fault_id, err = _require_fault(arguments)
    if err:
        return err
    try:
        fault = await _get_client().faults.get(project_id, fault_id)
    except RequestError as e:
        return _api_error("get fault", e)
    return _result(fault)


async def _handle_list_fault_notices(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, fault_id, err = _require_fault(arguments)
    if err:
        return err
    options = FaultListNoticesOptions(
        created_after=_parse_timestamp(arguments, "created_after", allow_epoch=True),
        created_before=_parse_timestamp(arguments, "created_before", allow_epoch=True),
        limit=_get_int(arguments, "limit"),
    )
    err = _validate_int_range(options.limit, "limit", 1, MAX_PAGE_SIZE)
    if err:
        return err
    try:
        notices = await _get_client().faults.list_notices(project_id, fault_id, options)
    except RequestError as e:
        return _api_error("list fault notices", e)
    return _result(normalize_notices(notices))


async def _handle_list_fault_affected_users(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, fault_id, err = _require_fault(arguments)
    if err:
        return err
    try:
        users = await _get_client().faults.list_affected_users(project_id, fault_id, _get_string(arguments, "q"))
    except RequestError as e:
        return _api_error("list fault affected users", e)
    return _result(users)


async def _handle_get_fault_counts(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    try:
        counts = await _get_client().faults.get_counts(project_id, _list_options(arguments))
    except RequestError as e:
        return _api_error("get fault counts", e)
    return _result(counts)

"""MCP tools for Insights alarms, including trigger history."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import CallToolResult, Tool

from honeybadger_mcp.hbapi.errors import RequestError
from honeybadger_mcp.hbapi.types import AlarmRequest
from honeybadger_mcp.mcp_tools.common import (
    DESTRUCTIVE,
    READ_ONLY,
    _api_error,
    _get_int,
    _get_optional_string,
    _get_string,
    _id_param,
    _missing,
    _parse_json_param,
    _require_id,
    _result,
    _validate_int_range,
)

_REFERENCE_HINT = "Call get_insights_reference for alarm documentation."
_REFERENCE_FIRST = (
    "IMPORTANT: Call get_insights_reference first for full alarm documentation, "
    "trigger_config schema, and query guidelines."
)


def _alarm_id_param(verb: str) -> dict[str, Any]:
    return {"type": "string", "description": f"The ID of the alarm to {verb}"}


def _alarm_body_params() -> dict[str, Any]:
    return {
        "name": {"type": "string", "minLength": 1, "description": "The name of the alarm"},
        "query": {
            "type": "string",
            "minLength": 1,
            "description": (
                "BadgerQL query for the alarm (e.g., 'filter event_type::str == \"notice\"'). "
                "The alarm system wraps the query to count results automatically."
            ),
        },
        "evaluation_period": {
            "type": "string",
            "description": "How often the alarm is evaluated (e.g., 5m, 1h, 1d). Minimum 1m.",
        },
        "trigger_config": {
            "type": "string",
            "description": (
                "JSON object defining when to trigger the alarm. Example: "
                '{"type": "alert_result_count", "config": {"operator": "gt", "value": 10}}'
            ),
        },
        "description": {"type": "string", "description": "Optional description of the alarm"},
        "stream_ids": {
            "type": "string",
            "description": 'Optional JSON array of stream IDs to query (defaults to ["default"])',
        },
        "lookback_lag": {
            "type": "string",
            "description": "Delay before evaluating to allow data to arrive (e.g., 1m, or 0s for no lag)",
        },
    }


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for alarm tools."""
    tools = [
        Tool(
            name="list_alarms",
            description=f"List all Insights alarms for a Honeybadger project. {_REFERENCE_HINT}",
            inputSchema={
                "type": "object",
                "properties": {"project_id": _id_param("The ID of the project to list alarms for")},
                "required": ["project_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_alarm",
            description=f"Get a single Insights alarm by ID. {_REFERENCE_HINT}",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the alarm belongs to"),
                    "alarm_id": _alarm_id_param("retrieve"),
                },
                "required": ["project_id", "alarm_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="create_alarm",
            description=f"Create a new Insights alarm for a Honeybadger project. {_REFERENCE_FIRST}",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project to create the alarm in"),
                    **_alarm_body_params(),
                },
                "required": ["project_id", "name", "query", "evaluation_period", "trigger_config"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="update_alarm",
            description=f"Update an existing Insights alarm. {_REFERENCE_FIRST}",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the alarm belongs to"),
                    "alarm_id": _alarm_id_param("update"),
                    **_alarm_body_params(),
                },
                "required": ["project_id", "alarm_id", "name", "query", "evaluation_period", "trigger_config"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="delete_alarm",
            description=f"Delete an Insights alarm. {_REFERENCE_HINT}",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the alarm belongs to"),
                    "alarm_id": _alarm_id_param("delete"),
                },
                "required": ["project_id", "alarm_id"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="get_alarm_history",
            description=f"Get the trigger history for an Insights alarm. {_REFERENCE_HINT}",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the alarm belongs to"),
                    "alarm_id": _alarm_id_param("get history for"),
                    "page": {"type": "integer", "minimum": 1, "description": "Page number for pagination (default: first page)"},
                },
                "required": ["project_id", "alarm_id"],
            },
            annotations=READ_ONLY,
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "list_alarms": _handle_list_alarms,
        "get_alarm": _handle_get_alarm,
        "create_alarm": _handle_create_alarm,
        "update_alarm": _handle_update_alarm,
        "delete_alarm": _handle_delete_alarm,
        "get_alarm_history": _handle_get_alarm_history,
    }

    return tools, handlers


def _alarm_request(arguments: dict[str, Any]) -> AlarmRequest | CallToolResult:
    """Validate and build the alarm body.  Checks run in schema order."""
    required: dict[str, str] = {}
    for name in ("name", "query", "evaluation_period", "trigger_config"):
        if name == "trigger_config" and isinstance(arguments.get(name), dict):
            continue
        value = _get_string(arguments, name)
        if not value:
            return _missing(name)
        required[name] = value

    trigger_config, err = _parse_json_param(arguments, "trigger_config", dict)
    if err:
        return err

    stream_ids = None
    if arguments.get("stream_ids"):
        stream_ids, err = _parse_json_param(arguments, "stream_ids", list)
        if err:
            return err

    return AlarmRequest(
        name=required["name"],
        query=required["query"],
        evaluation_period=required["evaluation_period"],
        trigger_config=trigger_config,
        description=_get_optional_string(arguments, "description") or None,
        stream_ids=stream_ids,
        lookback_lag=_get_optional_string(arguments, "lookback_lag") or None,
    )


def _require_alarm(arguments: dict[str, Any]) -> tuple[int, str, CallToolResult | None]:
    project_id, err = _require_id(arguments)
    if err:
        return 0, "", err
    alarm_id = _get_string(arguments, "alarm_id")
    if not alarm_id:
        return 0, "", _missing("alarm_id")
    return project_id, alarm_id, None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_list_alarms(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    try:
        alarms = await _get_client().alarms.list_alarms(project_id)
    except RequestError as e:
        return _api_error("list alarms", e)
    return _result(alarms)


async def _handle_get_alarm(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, alarm_id, err = _require_alarm(arguments)
    if err:
        return err
    try:
        alarm = await _get_client().alarms.get(project_id, alarm_id)
    except RequestError as e:
        return _api_error("get alarm", e)
    return _result(alarm)


async def _handle_create_alarm(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    req = _alarm_request(arguments)
    if isinstance(req, CallToolResult):
        return req
    try:
        alarm = await _get_client().alarms.create(project_id, req)
    except RequestError as e:
        return _api_error("create alarm", e)
    return _result(alarm)


async def _handle_update_alarm(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, alarm_id, err = _require_alarm(arguments)
    if err:
        return err
    req = _alarm_request(arguments)
    if isinstance(req, CallToolResult):
        return req
    try:
        result = await _get_client().alarms.update(project_id, alarm_id, req)
    except RequestError as e:
        return _api_error("update alarm", e)
    return _result(result)


async def _handle_delete_alarm(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, alarm_id, err = _require_alarm(arguments)
    if err:
        return err
    try:
        result = await _get_client().alarms.delete(project_id, alarm_id)
    except RequestError as e:
        return _api_error("delete alarm", e)
    return _result(result)


async def _handle_get_alarm_history(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, alarm_id, err = _require_alarm(arguments)
    if err:
        return err
    page = _get_int(arguments, "page")
    err = _validate_int_range(page, "page", 1)
    if err:
        return err
    try:
        history = await _get_client().alarms.history(project_id, alarm_id, page)
    except RequestError as e:
        return _api_error("get alarm history", e)
    return _result(history)

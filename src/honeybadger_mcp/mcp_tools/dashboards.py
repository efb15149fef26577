"""MCP tools for Insights dashboards."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import CallToolResult, Tool

from honeybadger_mcp.hbapi.errors import RequestError
from honeybadger_mcp.hbapi.types import DashboardRequest
from honeybadger_mcp.mcp_tools.common import (
    DESTRUCTIVE,
    READ_ONLY,
    _api_error,
    _get_optional_string,
    _get_string,
    _id_param,
    _missing,
    _parse_json_param,
    _require_id,
    _result,
)

_WIDGETS_DESCRIPTION = (
    "JSON array of widget objects. Call get_insights_reference for full widget schema and examples. "
    "Each widget needs: type (insights_vis, alarms, errors, deployments, checkins, uptime), and optionally: "
    "grid ({x,y,w,h}), presentation ({title, subtitle}), config (type-specific settings). "
    "For insights_vis widgets, config should include query (BadgerQL string) and vis ({view, chart_config})."
)
_DEFAULT_TS_DESCRIPTION = (
    "Default time range for the dashboard. ISO 8601 duration (e.g., P1D, PT3H) "
    "or keyword (today, yesterday, week, month)."
)


def _dashboard_body_params() -> dict[str, Any]:
    return {
        "title": {"type": "string", "minLength": 1, "description": "The title of the dashboard"},
        "widgets": {"type": "string", "description": _WIDGETS_DESCRIPTION},
        "default_ts": {"type": "string", "description": _DEFAULT_TS_DESCRIPTION},
    }


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for dashboard tools."""
    tools = [
        Tool(
            name="list_dashboards",
            description="List all Insights dashboards for a Honeybadger project",
            inputSchema={
                "type": "object",
                "properties": {"project_id": _id_param("The ID of the project to list dashboards for")},
                "required": ["project_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_dashboard",
            description="Get a single Insights dashboard by ID",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the dashboard belongs to"),
                    "dashboard_id": {"type": "string", "description": "The ID of the dashboard to retrieve"},
                },
                "required": ["project_id", "dashboard_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="create_dashboard",
            description=(
                "Create a new Insights dashboard for a Honeybadger project. "
                "IMPORTANT: Call get_insights_reference first for the widget schema."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project to create the dashboard in"),
                    **_dashboard_body_params(),
                },
                "required": ["project_id", "title", "widgets"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="update_dashboard",
            description=(
                "Update an existing Insights dashboard. "
                "IMPORTANT: Call get_insights_reference first for the widget schema."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the dashboard belongs to"),
                    "dashboard_id": {"type": "string", "description": "The ID of the dashboard to update"},
                    **_dashboard_body_params(),
                },
                "required": ["project_id", "dashboard_id", "title", "widgets"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="delete_dashboard",
            description="Delete an Insights dashboard",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project the dashboard belongs to"),
                    "dashboard_id": {"type": "string", "description": "The ID of the dashboard to delete"},
                },
                "required": ["project_id", "dashboard_id"],
            },
            annotations=DESTRUCTIVE,
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "list_dashboards": _handle_list_dashboards,
        "get_dashboard": _handle_get_dashboard,
        "create_dashboard": _handle_create_dashboard,
        "update_dashboard": _handle_update_dashboard,
        "delete_dashboard": _handle_delete_dashboard,
    }

    return tools, handlers


def _dashboard_request(arguments: dict[str, Any]) -> DashboardRequest | CallToolResult:
    title = _get_string(arguments, "title")
    if not title:
        return _missing("title")
    if not arguments.get("widgets"):
        return _missing("widgets")
    widgets, err = _parse_json_param(arguments, "widgets", list)
    if err:
        return err
    return DashboardRequest(
        title=title,
        widgets=widgets,
        default_ts=_get_optional_string(arguments, "default_ts") or None,
    )


def _require_dashboard(arguments: dict[str, Any]) -> tuple[int, str, CallToolResult | None]:
    project_id, err = _require_id(arguments)
    if err:
        return 0, "", err
    dashboard_id = _get_string(arguments, "dashboard_id")
    if not dashboard_id:
        return 0, "", _missing("dashboard_id")
    return project_id, dashboard_id, None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_list_dashboards(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    try:
        dashboards = await _get_client().dashboards.list_dashboards(project_id)
    except RequestError as e:
        return _api_error("list dashboards", e)
    return _result(dashboards)


async def _handle_get_dashboard(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, dashboard_id, err = _require_dashboard(arguments)
    if err:
        return err
    try:
        dashboard = await _get_client().dashboards.get(project_id, dashboard_id)
    except RequestError as e:
        return _api_error("get dashboard", e)
    return _result(dashboard)


async def _handle_create_dashboard(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    req = _dashboard_request(arguments)
    if isinstance(req, CallToolResult):
        return req
    try:
        dashboard = await _get_client().dashboards.create(project_id, req)
    except RequestError as e:
        return _api_error("create dashboard", e)
    return _result(dashboard)


async def _handle_update_dashboard(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, dashboard_id, err = _require_dashboard(arguments)
    if err:
        return err
    req = _dashboard_request(arguments)
    if isinstance(req, CallToolResult):
        return req
    try:
        result = await _get_client().dashboards.update(project_id, dashboard_id, req)
    except RequestError as e:
        return _api_error("update dashboard", e)
    return _result(result)


async def _handle_delete_dashboard(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, dashboard_id, err = _require_dashboard(arguments)
    if err:
        return err
    try:
        result = await _get_client().dashboards.delete(project_id, dashboard_id)
    except RequestError as e:
        return _api_error("delete dashboard", e)
    return _result(result)

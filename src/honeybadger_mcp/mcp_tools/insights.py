"""MCP tools for Insights: BadgerQL queries and the Insights reference guide."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import CallToolResult, Tool

from honeybadger_mcp.hbapi.errors import RequestError
from honeybadger_mcp.hbapi.types import InsightsQueryRequest
from honeybadger_mcp.mcp_tools import reference_data
from honeybadger_mcp.mcp_tools.common import (
    READ_ONLY,
    _api_error,
    _error,
    _get_optional_string,
    _get_string,
    _id_param,
    _missing,
    _require_id,
    _result,
    _text,
    _validate_choice,
)


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for Insights tools."""
    tools = [
        Tool(
            name="query_insights",
            description=(
                "Execute a BadgerQL query against Insights data. "
                "Call get_insights_reference first for BadgerQL syntax and examples."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project to query insights for"),
                    "query": {
                        "type": "string",
                        "minLength": 1,
                        "description": "BadgerQL query string to execute against your Insights data",
                    },
                    "ts": {
                        "type": "string",
                        "description": (
                            "Time range - shortcuts like 'today', 'week', or ISO 8601 duration (e.g., 'PT3H'). "
                            "Defaults to PT3H."
                        ),
                    },
                    "timezone": {
                        "type": "string",
                        "description": "IANA timezone identifier (e.g., 'America/New_York') for timestamp interpretation",
                    },
                },
                "required": ["project_id", "query"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_insights_reference",
            description="Get reference documentation for BadgerQL, Insights dashboard widgets and alarm configuration",
            inputSchema={
                "type": "object",
                "properties": {
                    "section": {
                        "type": "string",
                        "enum": list(reference_data.SECTIONS),
                        "description": "Only return one section (default: everything)",
                    },
                },
            },
            annotations=READ_ONLY,
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "query_insights": _handle_query_insights,
        "get_insights_reference": _handle_get_insights_reference,
    }

    return tools, handlers


async def _handle_query_insights(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    query = _get_string(arguments, "query")
    if not query.strip():
        return _missing("query")

    request = InsightsQueryRequest(
        query=query,
        ts=_get_optional_string(arguments, "ts") or None,
        timezone=_get_optional_string(arguments, "timezone") or None,
    )
    try:
        response = await _get_client().insights.query(project_id, request)
    except RequestError as e:
        return _api_error("query insights", e)

    # The Service reports unrunnable queries as 200 with an error object.
    query_error = response.get("error") if isinstance(response, dict) else None
    if query_error:
        message = query_error.get("message") if isinstance(query_error, dict) else str(query_error)
        return _error(f"Failed to query insights: {message or query_error}")
    return _result(response)


async def _handle_get_insights_reference(arguments: dict[str, Any]) -> CallToolResult:
    section = _get_string(arguments, "section").strip().lower()
    err = _validate_choice(section, "section", tuple(reference_data.SECTIONS))
    if err:
        return err
    return CallToolResult(content=_text(reference_data.render(section)), isError=False)

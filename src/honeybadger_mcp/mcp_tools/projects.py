"""MCP tools for projects: listing, CRUD, occurrence counts, integrations and reports."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import CallToolResult, Tool

from honeybadger_mcp.hbapi.errors import RequestError
from honeybadger_mcp.hbapi.types import (
    OCCURRENCE_PERIODS,
    REPORT_TYPES,
    OccurrenceCountOptions,
    ProjectRequest,
    ReportOptions,
)
from honeybadger_mcp.mcp_tools.common import (
    DESTRUCTIVE,
    READ_ONLY,
    _api_error,
    _error,
    _get_optional_bool,
    _get_optional_int,
    _get_optional_string,
    _get_string,
    _id_param,
    _missing,
    _parse_timestamp,
    _require_id,
    _result,
    _validate_choice,
)
from honeybadger_mcp.shaping import sanitize_project, summarize_projects

_PROJECT_FIELDS: dict[str, Any] = {
    "name": {"type": "string", "description": "The name of the project"},
    "resolve_errors_on_deploy": {
        "type": "boolean",
        "description": "Whether all unresolved faults should be marked as resolved when a deploy is recorded",
    },
    "disable_public_links": {
        "type": "boolean",
        "description": "Whether to allow fault details to be publicly shareable via a button on the fault detail page",
    },
    "user_url": {
        "type": "string",
        "description": "A URL format like 'http://example.com/admin/users/[user_id]' used to link to user records",
    },
    "source_url": {
        "type": "string",
        "description": "A URL format like 'https://gitlab.com/username/reponame/blob/[sha]/[file]#L[line]' for source links",
    },
    "purge_days": {
        "type": "integer",
        "minimum": 0,
        "description": "The number of days to retain data (up to the max number of days available to your subscription plan)",
    },
    "user_search_field": {
        "type": "string",
        "description": "A field such as 'context.user_email' that you provide in your error context",
    },
}


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for project tools."""
    tools = [
        Tool(
            name="list_projects",
            description="List all Honeybadger projects, optionally narrowed to one account",
            inputSchema={
                "type": "object",
                "properties": {
                    "account_id": {"type": "string", "description": "Only list projects that belong to this account"},
                },
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_project",
            description="Get a single Honeybadger project by ID",
            inputSchema={
                "type": "object",
                "properties": {"id": _id_param("The ID of the project to retrieve")},
                "required": ["id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="create_project",
            description="Create a new Honeybadger project",
            inputSchema={
                "type": "object",
                "properties": {
                    "account_id": {"type": "string", "description": "The ID of the account to create the project in"},
                    **_PROJECT_FIELDS,
                },
                "required": ["account_id", "name"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="update_project",
            description="Update an existing Honeybadger project; only the given fields are changed",
            inputSchema={
                "type": "object",
                "properties": {"id": _id_param("The ID of the project to update"), **_PROJECT_FIELDS},
                "required": ["id"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="delete_project",
            description="Delete a Honeybadger project",
            inputSchema={
                "type": "object",
                "properties": {"id": _id_param("The ID of the project to delete")},
                "required": ["id"],
            },
            annotations=DESTRUCTIVE,
        ),
        Tool(
            name="get_project_occurrence_counts",
            description="Get occurrence counts over time for one project, or for all projects when project_id is omitted",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project (omit for all projects)"),
                    "period": {
                        "type": "string",
                        "enum": list(OCCURRENCE_PERIODS),
                        "description": "Bucket size: hour, day, week or month (default: hour)",
                    },
                    "environment": {"type": "string", "description": "Only count occurrences in this environment"},
                },
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_project_integrations",
            description="List the notification integrations (channels) configured for a project",
            inputSchema={
                "type": "object",
                "properties": {"project_id": _id_param("The ID of the project")},
                "required": ["project_id"],
            },
            annotations=READ_ONLY,
        ),
        Tool(
            name="get_project_report",
            description="Get a report of notice counts for a project grouped by class, location, user or day",
            inputSchema={
                "type": "object",
                "properties": {
                    "project_id": _id_param("The ID of the project"),
                    "report_type": {
                        "type": "string",
                        "enum": list(REPORT_TYPES),
                        "description": "Which report to run",
                    },
                    "start": {"type": "string", "description": "Start of the report window (RFC 3339)"},
                    "stop": {"type": "string", "description": "End of the report window (RFC 3339)"},
                    "environment": {"type": "string", "description": "Only include notices from this environment"},
                },
                "required": ["project_id", "report_type"],
            },
            annotations=READ_ONLY,
        ),
    ]

    handlers: dict[str, Callable[..., Any]] = {
        "list_projects": _handle_list_projects,
        "get_project": _handle_get_project,
        "create_project": _handle_create_project,
        "update_project": _handle_update_project,
        "delete_project": _handle_delete_project,
        "get_project_occurrence_counts": _handle_get_project_occurrence_counts,
        "get_project_integrations": _handle_get_project_integrations,
        "get_project_report": _handle_get_project_report,
    }

    return tools, handlers


def _project_request(arguments: dict[str, Any]) -> ProjectRequest | CallToolResult:
    """Only fields present in *arguments* end up in the body."""
    resolve_errors_on_deploy, err = _get_optional_bool(arguments, "resolve_errors_on_deploy")
    if err:
        return err
    disable_public_links, err = _get_optional_bool(arguments, "disable_public_links")
    if err:
        return err
    purge_days, err = _get_optional_int(arguments, "purge_days")
    if err:
        return err
    if purge_days is not None and purge_days < 0:
        return _error("purge_days must be >= 0")
    return ProjectRequest(
        name=_get_optional_string(arguments, "name"),
        resolve_errors_on_deploy=resolve_errors_on_deploy,
        disable_public_links=disable_public_links,
        user_url=_get_optional_string(arguments, "user_url"),
        source_url=_get_optional_string(arguments, "source_url"),
        purge_days=purge_days,
        user_search_field=_get_optional_string(arguments, "user_search_field"),
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _handle_list_projects(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    account_id = _get_string(arguments, "account_id").strip()
    client = _get_client()
    try:
        if account_id:
            envelope = await client.projects.list_by_account(account_id)
        else:
            envelope = await client.projects.list_all()
    except RequestError as e:
        return _api_error("list projects", e)
    return _result(summarize_projects(envelope))


async def _handle_get_project(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments, "id")
    if err:
        return err
    try:
        project = await _get_client().projects.get(project_id)
    except RequestError as e:
        return _api_error("get project", e)
    return _result(sanitize_project(project))


async def _handle_create_project(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    account_id = _get_string(arguments, "account_id").strip()
    if not account_id:
        return _missing("account_id")
    req = _project_request(arguments)
    if isinstance(req, CallToolResult):
        return req
    if not req.name:
        return _missing("name")
    try:
        project = await _get_client().projects.create(account_id, req)
    except RequestError as e:
        return _api_error("create project", e)
    return _result(sanitize_project(project))


async def _handle_update_project(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments, "id")
    if err:
        return err
    req = _project_request(arguments)
    if isinstance(req, CallToolResult):
        return req
    try:
        result = await _get_client().projects.update(project_id, req)
    except RequestError as e:
        return _api_error("update project", e)
    return _result(result)


async def _handle_delete_project(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments, "id")
    if err:
        return err
    try:
        result = await _get_client().projects.delete(project_id)
    except RequestError as e:
        return _api_error("delete project", e)
    return _result(result)


async def _handle_get_project_occurrence_counts(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    period = _get_string(arguments, "period")
    err = _validate_choice(period, "period", OCCURRENCE_PERIODS)
    if err:
        return err
    options = OccurrenceCountOptions(period=period, environment=_get_string(arguments, "environment"))

    client = _get_client()
    try:
        if arguments.get("project_id") is None:
            counts: Any = await client.projects.get_all_occurrence_counts(options)
        else:
            project_id, err = _require_id(arguments)
            if err:
                return err
            counts = await client.projects.get_occurrence_counts(project_id, options)
    except RequestError as e:
        return _api_error("get occurrence counts", e)
    return _result(counts)


async def _handle_get_project_integrations(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    try:
        integrations = await _get_client().projects.get_integrations(project_id)
    except RequestError as e:
        return _api_error("get project integrations", e)
    return _result(integrations)


async def _handle_get_project_report(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_client

    project_id, err = _require_id(arguments)
    if err:
        return err
    report_type = _get_string(arguments, "report_type")
    if not report_type:
        return _missing("report_type")
    err = _validate_choice(report_type, "report_type", REPORT_TYPES)
    if err:
        return err

    options = ReportOptions(
        start=_parse_timestamp(arguments, "start"),
        stop=_parse_timestamp(arguments, "stop"),
        environment=_get_string(arguments, "environment"),
    )
    try:
        report = await _get_client().projects.get_report(project_id, report_type, options)
    except RequestError as e:
        return _api_error("get project report", e)
    return _result(report)

"""MCP server exposing the Honeybadger REST API as tools.

Speaks MCP over stdio.  Tools are registered once at import time; the
read-only flag and the API client are set by :func:`configure` at startup.

Usage:
    honeybadger-mcp                                  # token from HONEYBADGER_PERSONAL_AUTH_TOKEN
    honeybadger-mcp --no-read-only --log-level debug
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, ErrorData, Tool

from honeybadger_mcp import __version__
from honeybadger_mcp.config import Config
from honeybadger_mcp.hbapi import HoneybadgerClient
from honeybadger_mcp.mcp_tools import alarms, dashboards, faults, insights, projects, search
from honeybadger_mcp.mcp_tools.common import _error
from honeybadger_mcp.mcp_tools.registry import ToolRegistry, is_read_only_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "honeybadger-mcp-server"

# ---------------------------------------------------------------------------
# Server state
# ---------------------------------------------------------------------------

client: HoneybadgerClient | None = None
read_only: bool = True


def _get_client() -> HoneybadgerClient:
    if client is None:
        msg = "Honeybadger client not initialized"
        raise RuntimeError(msg)
    return client


def _is_read_only() -> bool:
    return read_only


def _build_registry() -> ToolRegistry:
    registry = ToolRegistry()
    for family in (projects, faults, insights, dashboards, alarms):
        tools, handlers = family.register()
        registry.add_all(tools, handlers)
    # search_tools searches the other tools, not itself
    tools, handlers = search.register()
    registry.add_all(tools, handlers, searchable=False)
    registry.freeze()
    return registry


_registry = _build_registry()


def _get_registry() -> ToolRegistry:
    return _registry


@asynccontextmanager
async def _session_lifespan(_server: Server[dict[str, Any], Any]) -> AsyncIterator[dict[str, Any]]:
    session_id = uuid.uuid4().hex
    logger.info("client_session_registered", extra={"session_id": session_id})
    try:
        yield {"session_id": session_id}
    finally:
        logger.info("client_session_unregistered", extra={"session_id": session_id})


server: Server[dict[str, Any], Any] = Server(SERVER_NAME, version=__version__, lifespan=_session_lifespan)


# ---------------------------------------------------------------------------
# Tool listing
# ---------------------------------------------------------------------------


@server.list_tools()  # type: ignore[untyped-decorator,no-untyped-call]
async def list_tools() -> list[Tool]:
    logger.debug("processing_request", extra={"method": "tools/list"})
    return _registry.tools(read_only=_is_read_only())


# ---------------------------------------------------------------------------
# Tool dispatch
# ---------------------------------------------------------------------------


async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
    """Run one tool.

    Unknown tools, and destructive tools in read-only mode, are rejected
    with a protocol-level :class:`McpError`.  Everything else comes back as
    a tool result, with handler crashes turned into an error result.
    """
    arguments = arguments or {}
    logger.debug("processing_request", extra={"method": "tools/call", "tool": name})

    entry = _registry.get(name)
    if entry is None:
        logger.warning("unknown_tool", extra={"tool": name})
        raise McpError(ErrorData(code=types.INVALID_PARAMS, message=f"Unknown tool: {name}"))
    tool, handler = entry
    if _is_read_only() and not is_read_only_tool(tool):
        logger.warning("tool_rejected_read_only", extra={"tool": name})
        raise McpError(ErrorData(code=types.INVALID_PARAMS, message=f"Tool {name} is not available in read-only mode"))

    t0 = time.monotonic()
    try:
        result = await handler(arguments)
    except asyncio.CancelledError:
        logger.info("tool_call_cancelled", extra={"tool": name, "args_data": arguments})
        raise
    except Exception as exc:
        logger.error("tool_error", extra={"tool": name, "args_data": arguments, "error": str(exc)}, exc_info=True)
        return _error(f"Internal error in {name}: {exc}")

    duration_ms = round((time.monotonic() - t0) * 1000, 1)
    if result.isError:
        text = result.content[0].text if result.content and isinstance(result.content[0], types.TextContent) else ""
        logger.info(
            "tool_call_failed",
            extra={"tool": name, "args_data": arguments, "duration_ms": duration_ms, "error": text},
        )
    else:
        logger.info("tool_call", extra={"tool": name, "args_data": arguments, "duration_ms": duration_ms})
    return result


async def _handle_call_tool_request(req: types.CallToolRequest) -> types.ServerResult:
    return types.ServerResult(await call_tool(req.params.name, req.params.arguments))


# Registered directly instead of through ``@server.call_tool()``, which
# would turn McpError into an error result instead of a JSON-RPC error.
server.request_handlers[types.CallToolRequest] = _handle_call_tool_request


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def configure(config: Config, *, transport: Any = None) -> HoneybadgerClient:
    """Install the API client and read-only flag for this process."""
    global client, read_only

    read_only = config.read_only
    client = HoneybadgerClient(config.auth_token, config.api_url, transport=transport)
    return client


async def _run(config: Config) -> None:
    from honeybadger_mcp.logging import setup_logging

    setup_logging(config.log_level, config.log_file)
    api = configure(config)
    logger.info(
        "mcp_server_start",
        extra={
            "tool": "server",
            "args_data": {
                "api_url": config.api_url,
                "read_only": config.read_only,
                "tools": len(_registry.tools(read_only=config.read_only)),
            },
        },
    )
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await api.aclose()
        logger.info("mcp_server_stop", extra={"tool": "server"})


def main() -> None:
    from honeybadger_mcp.cli import stdio

    stdio(prog_name="honeybadger-mcp")


if __name__ == "__main__":
    main()

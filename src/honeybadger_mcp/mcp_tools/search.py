"""The ``search_tools`` meta-tool: substring search over the tool catalog."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from mcp.types import CallToolResult, Tool

from honeybadger_mcp.mcp_tools.common import READ_ONLY, _get_string, _missing, _text
from honeybadger_mcp.mcp_tools.registry import CatalogEntry

NO_MATCHES = "No tools found matching the query."


def register() -> tuple[list[Tool], dict[str, Callable[..., Any]]]:
    """Return (tool_definitions, handler_map) for the search meta-tool."""
    tools = [
        Tool(
            name="search_tools",
            description=(
                "Search available Honeybadger tools by name or description. "
                "Use this to discover tools before calling them."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search query to match against tool names and descriptions",
                    },
                },
                "required": ["query"],
            },
            annotations=READ_ONLY,
        ),
    ]
    handlers: dict[str, Callable[..., Any]] = {"search_tools": _handle_search_tools}
    return tools, handlers


def search_catalog(catalog: Iterable[CatalogEntry], query: str) -> list[CatalogEntry]:
    """Case-insensitive substring match on name or description, in catalog order."""
    q = query.lower()
    return [e for e in catalog if q in e.name.lower() or q in e.description.lower()]


def format_matches(matches: list[CatalogEntry]) -> str:
    if not matches:
        return NO_MATCHES
    return "\n\n".join(
        f"Name: {m.name}\nDescription: {m.description}\nRead-only: {'yes' if m.read_only else 'no'}" for m in matches
    )


async def _handle_search_tools(arguments: dict[str, Any]) -> CallToolResult:
    from honeybadger_mcp.mcp_server import _get_registry, _is_read_only

    query = _get_string(arguments, "query").strip()
    if not query:
        return _missing("query")
    catalog = _get_registry().catalog(read_only=_is_read_only())
    return CallToolResult(content=_text(format_matches(search_catalog(catalog, query))), isError=False)

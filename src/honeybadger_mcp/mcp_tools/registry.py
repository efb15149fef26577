"""Tool registry: descriptors, handlers and the searchable catalog.

The registry is filled once at import time of ``mcp_server`` and frozen;
after that only read-only views are handed out.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from mcp.types import CallToolResult, Tool

ToolHandler = Callable[[dict[str, Any]], Awaitable[CallToolResult]]


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    description: str
    read_only: bool


def is_read_only_tool(tool: Tool) -> bool:
    """True only when the read-only hint is explicitly set."""
    return tool.annotations is not None and tool.annotations.readOnlyHint is True


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._handlers: dict[str, ToolHandler] = {}
        self._catalog: list[CatalogEntry] = []
        self._frozen = False

    def add(self, tool: Tool, handler: ToolHandler, *, searchable: bool = True) -> None:
        if self._frozen:
            msg = "tool registry is frozen"
            raise RuntimeError(msg)
        if tool.name in self._tools:
            msg = f"duplicate tool name: {tool.name}"
            raise ValueError(msg)
        self._tools[tool.name] = tool
        self._handlers[tool.name] = handler
        if searchable:
            self._catalog.append(CatalogEntry(tool.name, tool.description or "", is_read_only_tool(tool)))

    def add_all(
        self,
        tools: Sequence[Tool],
        handlers: Mapping[str, ToolHandler],
        *,
        searchable: bool = True,
    ) -> None:
        """Register a family as returned by a tool module's ``register()``."""
        names = {t.name for t in tools}
        if names != set(handlers):
            msg = f"tool/handler mismatch: {sorted(names ^ set(handlers))}"
            raise ValueError(msg)
        for tool in tools:
            self.add(tool, handlers[tool.name], searchable=searchable)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def tools(self, *, read_only: bool) -> list[Tool]:
        """Descriptors in registration order, filtered in read-only mode."""
        return [t for t in self._tools.values() if not read_only or is_read_only_tool(t)]

    def catalog(self, *, read_only: bool) -> tuple[CatalogEntry, ...]:
        return tuple(e for e in self._catalog if not read_only or e.read_only)

    def get(self, name: str) -> tuple[Tool, ToolHandler] | None:
        tool = self._tools.get(name)
        if tool is None:
            return None
        return tool, self._handlers[name]

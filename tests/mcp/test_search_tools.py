"""Tests for the search_tools meta-tool and catalog matching."""

from __future__ import annotations

import re

from honeybadger_mcp.mcp_server import call_tool
from honeybadger_mcp.mcp_tools.registry import CatalogEntry
from honeybadger_mcp.mcp_tools.search import NO_MATCHES, format_matches, search_catalog
from tests._fakes import FakeHoneybadger
from tests.mcp._helpers import _err, _ok


def _names(text: str) -> list[str]:
    return re.findall(r"^Name: (\S+)$", text, flags=re.MULTILINE)


class TestSearchCatalog:
    CATALOG = (
        CatalogEntry("list_faults", "Get a list of faults", True),
        CatalogEntry("delete_alarm", "Delete an Insights alarm", False),
    )

    def test_case_insensitive_name_or_description(self) -> None:
        assert [e.name for e in search_catalog(self.CATALOG, "FAULT")] == ["list_faults"]
        assert [e.name for e in search_catalog(self.CATALOG, "insights")] == ["delete_alarm"]

    def test_format(self) -> None:
        text = format_matches(list(self.CATALOG))
        assert text == (
            "Name: list_faults\nDescription: Get a list of faults\nRead-only: yes\n\n"
            "Name: delete_alarm\nDescription: Delete an Insights alarm\nRead-only: no"
        )

    def test_no_matches(self) -> None:
        assert format_matches([]) == NO_MATCHES


class TestSearchTool:
    async def test_read_write_mode(self, mcp_api: FakeHoneybadger) -> None:
        text = _ok(await call_tool("search_tools", {"query": "dashboard"}))
        assert _names(text) == [
            "get_insights_reference",
            "list_dashboards",
            "get_dashboard",
            "create_dashboard",
            "update_dashboard",
            "delete_dashboard",
        ]

    async def test_read_only_mode_hides_destructive(self, read_only_mode: FakeHoneybadger) -> None:
        text = _ok(await call_tool("search_tools", {"query": "dashboard"}))
        assert _names(text) == ["get_insights_reference", "list_dashboards", "get_dashboard"]
        assert "Read-only: no" not in text

    async def test_does_not_list_itself(self, mcp_api: FakeHoneybadger) -> None:
        assert _ok(await call_tool("search_tools", {"query": "search"})) == NO_MATCHES

    async def test_query_trimmed(self, mcp_api: FakeHoneybadger) -> None:
        assert _names(_ok(await call_tool("search_tools", {"query": "  get_fault_counts  "}))) == ["get_fault_counts"]

    async def test_query_required(self, mcp_api: FakeHoneybadger) -> None:
        assert _err(await call_tool("search_tools", {"query": "   "})) == "query is required"
        assert mcp_api.requests == []

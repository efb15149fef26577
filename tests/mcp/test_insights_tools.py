"""Tests for query_insights and get_insights_reference."""

from __future__ import annotations

from honeybadger_mcp.mcp_server import call_tool
from tests._fakes import FakeHoneybadger
from tests.mcp._helpers import _err, _ok

QUERY_PATH = "/projects/1/insights/queries"


class TestQueryInsights:
    async def test_results_returned(self, mcp_api: FakeHoneybadger) -> None:
        response = {"results": [{"count": 3}], "meta": {"query": "stats count()", "rows": 1}}
        mcp_api.add("POST", QUERY_PATH, json_body=response)
        data = _ok(await call_tool("query_insights", {"project_id": 1, "query": "stats count()", "ts": "PT3H"}))
        assert data == response
        assert mcp_api.body() == {"query": "stats count()", "ts": "PT3H"}

    async def test_empty_optional_strings_not_sent(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("POST", QUERY_PATH, json_body={"results": [], "meta": {}})
        _ok(await call_tool("query_insights", {"project_id": 1, "query": "fields @ts", "ts": "", "timezone": ""}))
        assert mcp_api.body() == {"query": "fields @ts"}

    async def test_query_required(self, mcp_api: FakeHoneybadger) -> None:
        assert _err(await call_tool("query_insights", {"project_id": 1, "query": "   "})) == "query is required"
        assert mcp_api.requests == []

    async def test_error_in_success_response(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("POST", QUERY_PATH, json_body={"results": [], "meta": {}, "error": {"message": "bad query"}})
        msg = _err(await call_tool("query_insights", {"project_id": 1, "query": "nonsense"}))
        assert msg == "Failed to query insights: bad query"

    async def test_api_error(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("POST", QUERY_PATH, json_body={"error": "Unknown field"}, status=400)
        msg = _err(await call_tool("query_insights", {"project_id": 1, "query": "fields nope"}))
        assert msg == "Failed to query insights: Unknown field"

    async def test_runs_in_read_only_mode(self, read_only_mode: FakeHoneybadger) -> None:
        read_only_mode.add("POST", QUERY_PATH, json_body={"results": [], "meta": {}})
        _ok(await call_tool("query_insights", {"project_id": 1, "query": "fields @ts"}))


class TestInsightsReference:
    async def test_full_reference(self, mcp_api: FakeHoneybadger) -> None:
        text = _ok(await call_tool("get_insights_reference", {}))
        assert text.startswith("# Honeybadger Insights reference")
        for heading in ("## BadgerQL", "## Dashboards", "## Alarms"):
            assert heading in text
        assert mcp_api.requests == []

    async def test_single_section(self, mcp_api: FakeHoneybadger) -> None:
        text = _ok(await call_tool("get_insights_reference", {"section": "Alarms"}))
        assert "## Alarms" in text
        assert "## BadgerQL" not in text

    async def test_unknown_section(self, mcp_api: FakeHoneybadger) -> None:
        msg = _err(await call_tool("get_insights_reference", {"section": "widgets"}))
        assert msg == "section must be one of: badgerql, dashboards, alarms"

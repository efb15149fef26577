"""End-to-end tests through an in-memory MCP client session."""

from __future__ import annotations

import json

import pytest
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session

from honeybadger_mcp.mcp_server import server
from tests._fakes import FakeHoneybadger
from tests.mcp._helpers import _err, _ok


class TestProtocol:
    async def test_initialize_and_list_tools(self, mcp_api: FakeHoneybadger) -> None:
        async with create_connected_server_and_client_session(server) as session:
            result = await session.list_tools()
        assert len(result.tools) == 27

    async def test_read_only_listing(self, read_only_mode: FakeHoneybadger) -> None:
        async with create_connected_server_and_client_session(server) as session:
            result = await session.list_tools()
        names = {t.name for t in result.tools}
        assert len(names) == 18
        assert "create_project" not in names

    async def test_list_faults_round_trip(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("GET", "/projects/123/faults", json_body={"results": [{"id": 1}], "links": {}})
        args = {"project_id": 123, "q": "NoMethodError", "limit": 10, "order": "recent"}
        async with create_connected_server_and_client_session(server) as session:
            result = await session.call_tool("list_faults", args)
        assert _ok(result)["results"] == [{"id": 1}]
        assert str(mcp_api.last.url) == "http://mock/v2/projects/123/faults?limit=10&order=recent&q=NoMethodError"

    async def test_update_project(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("PUT", "/projects/5")
        async with create_connected_server_and_client_session(server) as session:
            result = await session.call_tool("update_project", {"id": 5, "name": "Renamed"})
        assert _ok(result) == {"success": True, "message": "Project 5 was successfully updated"}

    async def test_unknown_tool_is_protocol_error(self, mcp_api: FakeHoneybadger) -> None:
        async with create_connected_server_and_client_session(server) as session:
            with pytest.raises(McpError) as exc_info:
                await session.call_tool("nonexistent_tool", {})
        assert "tool" in exc_info.value.error.message.lower()

    async def test_read_only_rejection_is_protocol_error(self, read_only_mode: FakeHoneybadger) -> None:
        async with create_connected_server_and_client_session(server) as session:
            with pytest.raises(McpError):
                await session.call_tool("delete_project", {"id": 1})
        assert read_only_mode.writes == 0

    async def test_missing_argument_is_tool_error(self, mcp_api: FakeHoneybadger) -> None:
        async with create_connected_server_and_client_session(server) as session:
            result = await session.call_tool("get_fault", {"project_id": 1})
        assert _err(result) == "fault_id is required"

    async def test_project_summary_hides_token(self, mcp_api: FakeHoneybadger) -> None:
        project = {"id": 1, "name": "App", "token": "secret", "fault_count": 2, "owner": {"id": 3}}
        mcp_api.add("GET", "/projects", json_body={"results": [project], "links": {}})
        async with create_connected_server_and_client_session(server) as session:
            result = await session.call_tool("list_projects", {})
        text = result.content[0].text  # type: ignore[union-attr]
        assert "secret" not in text
        assert set(json.loads(text)["results"][0]) == {
            "id",
            "name",
            "active",
            "created_at",
            "last_notice_at",
            "fault_count",
            "unresolved_fault_count",
        }

    async def test_insights_error_in_body(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("POST", "/projects/1/insights/queries", json_body={"results": [], "error": {"message": "bad query"}})
        async with create_connected_server_and_client_session(server) as session:
            result = await session.call_tool("query_insights", {"project_id": 1, "query": "x"})
        assert "bad query" in _err(result)

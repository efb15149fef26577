"""Tests for the dashboard tools."""

from __future__ import annotations

import json

from honeybadger_mcp.mcp_server import call_tool
from tests._fakes import FakeHoneybadger
from tests.mcp._helpers import _err, _ok

WIDGETS = [{"type": "insights_vis", "config": {"query": "stats count() by bin(1h)"}}]


class TestReadDashboards:
    async def test_list(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("GET", "/projects/1/dashboards", json_body={"results": [{"id": "d1"}], "links": {}})
        assert _ok(await call_tool("list_dashboards", {"project_id": 1}))["results"] == [{"id": "d1"}]
        assert mcp_api.writes == 0

    async def test_get(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("GET", "/projects/1/dashboards/d1", json_body={"id": "d1", "title": "Ops"})
        assert _ok(await call_tool("get_dashboard", {"project_id": 1, "dashboard_id": "d1"}))["title"] == "Ops"

    async def test_dashboard_id_required(self, mcp_api: FakeHoneybadger) -> None:
        assert _err(await call_tool("get_dashboard", {"project_id": 1})) == "dashboard_id is required"


class TestCreateDashboard:
    async def test_widgets_json_string(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("POST", "/projects/1/dashboards", json_body={"id": "d2"})
        args = {"project_id": 1, "title": "Ops", "widgets": json.dumps(WIDGETS), "default_ts": "P7D"}
        assert _ok(await call_tool("create_dashboard", args)) == {"id": "d2"}
        assert mcp_api.body() == {"dashboard": {"title": "Ops", "widgets": WIDGETS, "default_ts": "P7D"}}

    async def test_widgets_already_decoded(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("POST", "/projects/1/dashboards", json_body={"id": "d2"})
        _ok(await call_tool("create_dashboard", {"project_id": 1, "title": "Ops", "widgets": WIDGETS}))
        assert mcp_api.body()["dashboard"]["widgets"] == WIDGETS

    async def test_title_checked_before_widgets(self, mcp_api: FakeHoneybadger) -> None:
        assert _err(await call_tool("create_dashboard", {"project_id": 1})) == "title is required"
        assert _err(await call_tool("create_dashboard", {"project_id": 1, "title": "Ops"})) == "widgets is required"

    async def test_invalid_widgets_json(self, mcp_api: FakeHoneybadger) -> None:
        msg = _err(await call_tool("create_dashboard", {"project_id": 1, "title": "Ops", "widgets": "[{"}))
        assert msg.startswith("Failed to parse widgets JSON:")
        assert mcp_api.requests == []

    async def test_widgets_must_be_array(self, mcp_api: FakeHoneybadger) -> None:
        msg = _err(await call_tool("create_dashboard", {"project_id": 1, "title": "Ops", "widgets": '{"a": 1}'}))
        assert msg == "Failed to parse widgets JSON: expected a JSON array"


class TestUpdateDeleteDashboard:
    async def test_update_message(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("PUT", "/projects/1/dashboards/d1", status=204)
        args = {"project_id": 1, "dashboard_id": "d1", "title": "Ops", "widgets": json.dumps(WIDGETS)}
        data = _ok(await call_tool("update_dashboard", args))
        assert data == {"success": True, "message": "Dashboard d1 was successfully updated"}

    async def test_delete(self, mcp_api: FakeHoneybadger) -> None:
        mcp_api.add("DELETE", "/projects/1/dashboards/d1")
        data = _ok(await call_tool("delete_dashboard", {"project_id": 1, "dashboard_id": "d1"}))
        assert data["message"] == "Dashboard d1 deleted successfully"

    async def test_delete_error(self, mcp_api: FakeHoneybadger) -> None:
        msg = _err(await call_tool("delete_dashboard", {"project_id": 1, "dashboard_id": "gone"}))
        assert msg == "Failed to delete dashboard: Not found"

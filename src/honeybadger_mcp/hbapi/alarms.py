"""Insights alarms resource, including trigger history."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from honeybadger_mcp.hbapi.types import AlarmRequest, OperationResult, build_query

if TYPE_CHECKING:
    from honeybadger_mcp.hbapi.client import HoneybadgerClient


class AlarmsService:
    def __init__(self, client: HoneybadgerClient) -> None:
        self._client = client

    async def list_alarms(self, project_id: int) -> Any:
        return await self._client.request("GET", f"/projects/{project_id}/alarms")

    async def get(self, project_id: int, alarm_id: str) -> dict[str, Any]:
        return cast(dict[str, Any], await self._client.request("GET", f"/projects/{project_id}/alarms/{alarm_id}"))

    async def create(self, project_id: int, req: AlarmRequest) -> dict[str, Any]:
        result = await self._client.request("POST", f"/projects/{project_id}/alarms", body=req.to_body())
        return cast(dict[str, Any], result)

    async def update(self, project_id: int, alarm_id: str, req: AlarmRequest) -> Any:
        result = await self._client.request(
            "PUT",
            f"/projects/{project_id}/alarms/{alarm_id}",
            body=req.to_body(),
        )
        if result is None:
            return OperationResult(success=True, message=f"Alarm {alarm_id} was successfully updated")
        return result

    async def delete(self, project_id: int, alarm_id: str) -> OperationResult:
        await self._client.request("DELETE", f"/projects/{project_id}/alarms/{alarm_id}")
        return OperationResult(success=True, message=f"Alarm {alarm_id} deleted successfully")

    async def history(self, project_id: int, alarm_id: str, page: int = 0) -> Any:
        """GET /projects/{id}/alarms/{alarm_id}/history[?page=N]"""
        return await self._client.request(
            "GET",
            f"/projects/{project_id}/alarms/{alarm_id}/history",
            params=build_query(page=page),
        )

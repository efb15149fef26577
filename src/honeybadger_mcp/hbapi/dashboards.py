"""Insights dashboards resource."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from honeybadger_mcp.hbapi.types import DashboardRequest, OperationResult

if TYPE_CHECKING:
    from honeybadger_mcp.hbapi.client import HoneybadgerClient


class DashboardsService:
    def __init__(self, client: HoneybadgerClient) -> None:
        self._client = client

    async def list_dashboards(self, project_id: int) -> Any:
        return await self._client.request("GET", f"/projects/{project_id}/dashboards")

    async def get(self, project_id: int, dashboard_id: str) -> dict[str, Any]:
        return cast(dict[str, Any], await self._client.request("GET", f"/projects/{project_id}/dashboards/{dashboard_id}"))

    async def create(self, project_id: int, req: DashboardRequest) -> dict[str, Any]:
        result = await self._client.request("POST", f"/projects/{project_id}/dashboards", body=req.to_body())
        return cast(dict[str, Any], result)

    async def update(self, project_id: int, dashboard_id: str, req: DashboardRequest) -> Any:
        """PUT /projects/{id}/dashboards/{dashboard_id}.

        Returns the updated dashboard when the Service sends one, otherwise a
        synthesized success payload.
        """
        result = await self._client.request(
            "PUT",
            f"/projects/{project_id}/dashboards/{dashboard_id}",
            body=req.to_body(),
        )
        if result is None:
            return OperationResult(success=True, message=f"Dashboard {dashboard_id} was successfully updated")
        return result

    async def delete(self, project_id: int, dashboard_id: str) -> OperationResult:
        await self._client.request("DELETE", f"/projects/{project_id}/dashboards/{dashboard_id}")
        return OperationResult(success=True, message=f"Dashboard {dashboard_id} deleted successfully")

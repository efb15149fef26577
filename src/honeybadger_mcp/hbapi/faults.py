"""Faults resource: fault lists, details, notices, affected users and counts.

API docs: https://docs.honeybadger.io/api/faults/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from honeybadger_mcp.hbapi.types import (
    AffectedUser,
    Fault,
    FaultCounts,
    FaultListNoticesOptions,
    FaultListOptions,
    ListEnvelope,
    build_query,
)

if TYPE_CHECKING:
    from honeybadger_mcp.hbapi.client import HoneybadgerClient


class FaultsService:
    def __init__(self, client: HoneybadgerClient) -> None:
        self._client = client

    async def list_faults(self, project_id: int, options: FaultListOptions) -> ListEnvelope:
        result = await self._client.request("GET", f"/projects/{project_id}/faults", params=options.to_params())
        return cast(ListEnvelope, result)

    async def get(self, project_id: int, fault_id: int) -> Fault:
        return cast(Fault, await self._client.request("GET", f"/projects/{project_id}/faults/{fault_id}"))

    async def list_notices(self, project_id: int, fault_id: int, options: FaultListNoticesOptions) -> ListEnvelope:
        result = await self._client.request(
            "GET",
            f"/projects/{project_id}/faults/{fault_id}/notices",
            params=options.to_params(),
        )
        return cast(ListEnvelope, result)

    async def list_affected_users(self, project_id: int, fault_id: int, q: str = "") -> list[AffectedUser]:
        result = await self._client.request(
            "GET",
            f"/projects/{project_id}/faults/{fault_id}/affected_users",
            params=build_query(q=q),
        )
        return cast(list[AffectedUser], result or [])

    async def get_counts(self, project_id: int, options: FaultListOptions) -> FaultCounts:
        """GET /projects/{id}/faults/summary -- same filters as :meth:`list`, no paging."""
        result = await self._client.request(
            "GET",
            f"/projects/{project_id}/faults/summary",
            params=options.filter_params(),
        )
        return cast(FaultCounts, result)

"""Insights resource: BadgerQL queries.

API docs: https://docs.honeybadger.io/api/insights/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from honeybadger_mcp.hbapi.types import InsightsQueryRequest, InsightsQueryResponse

if TYPE_CHECKING:
    from honeybadger_mcp.hbapi.client import HoneybadgerClient


class InsightsService:
    def __init__(self, client: HoneybadgerClient) -> None:
        self._client = client

    async def query(self, project_id: int, request: InsightsQueryRequest) -> InsightsQueryResponse:
        """POST /projects/{id}/insights/queries.

        A query the Service cannot run may still come back as 200 with an
        ``error`` object; callers must check for it.
        """
        result = await self._client.request(
            "POST",
            f"/projects/{project_id}/insights/queries",
            body=request.to_body(),
        )
        return cast(InsightsQueryResponse, result)

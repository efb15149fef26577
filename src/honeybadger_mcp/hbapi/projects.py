"""Projects resource: listing, CRUD, occurrence counts, integrations and reports.

API docs: https://docs.honeybadger.io/api/projects/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from honeybadger_mcp.hbapi.types import (
    REPORT_TYPES,
    ListEnvelope,
    OccurrenceCount,
    OccurrenceCountOptions,
    OperationResult,
    Project,
    ProjectRequest,
    ReportOptions,
)

if TYPE_CHECKING:
    from honeybadger_mcp.hbapi.client import HoneybadgerClient


class ProjectsService:
    def __init__(self, client: HoneybadgerClient) -> None:
        self._client = client

    async def list_all(self) -> ListEnvelope:
        """GET /projects -- every project visible to the token."""
        return cast(ListEnvelope, await self._client.request("GET", "/projects"))

    async def list_by_account(self, account_id: str) -> ListEnvelope:
        """GET /projects?account_id=..."""
        return cast(ListEnvelope, await self._client.request("GET", "/projects", params={"account_id": account_id}))

    async def get(self, project_id: int) -> Project:
        return cast(Project, await self._client.request("GET", f"/projects/{project_id}"))

    async def create(self, account_id: str, req: ProjectRequest) -> Project:
        """POST /projects?account_id=... with ``{project: ...}``."""
        result = await self._client.request(
            "POST",
            "/projects",
            params={"account_id": account_id},
            body=req.to_body(),
        )
        return cast(Project, result)

    async def update(self, project_id: int, req: ProjectRequest) -> OperationResult:
        """PUT /projects/{id}.  The Service replies with an empty body."""
        await self._client.request("PUT", f"/projects/{project_id}", body=req.to_body())
        return OperationResult(success=True, message=f"Project {project_id} was successfully updated")

    async def delete(self, project_id: int) -> OperationResult:
        await self._client.request("DELETE", f"/projects/{project_id}")
        return OperationResult(success=True, message=f"Project {project_id} deleted successfully")

    async def get_occurrence_counts(self, project_id: int, options: OccurrenceCountOptions) -> list[OccurrenceCount]:
        """GET /projects/{id}/occurrences -- ``[[epoch, count], ...]``."""
        result = await self._client.request("GET", f"/projects/{project_id}/occurrences", params=options.to_params())
        return cast(list[OccurrenceCount], result or [])

    async def get_all_occurrence_counts(self, options: OccurrenceCountOptions) -> dict[str, list[OccurrenceCount]]:
        """GET /projects/occurrences -- mapping of project id (as a string) to counts."""
        result = await self._client.request("GET", "/projects/occurrences", params=options.to_params())
        return cast(dict[str, list[OccurrenceCount]], result or {})

    async def get_integrations(self, project_id: int) -> list[dict[str, Any]]:
        result = await self._client.request("GET", f"/projects/{project_id}/integrations")
        return cast(list[dict[str, Any]], result or [])

    async def get_report(self, project_id: int, report_type: str, options: ReportOptions) -> list[list[Any]]:
        """GET /projects/{id}/reports/{type} -- rows of ``[label, number]``."""
        if report_type not in REPORT_TYPES:
            msg = f"unknown report type: {report_type}"
            raise ValueError(msg)
        result = await self._client.request(
            "GET",
            f"/projects/{project_id}/reports/{report_type}",
            params=options.to_params(),
        )
        return cast(list[list[Any]], result or [])

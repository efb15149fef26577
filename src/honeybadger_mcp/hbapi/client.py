"""Async HTTP client for the Honeybadger REST API (v2).

Every request is authenticated with HTTP Basic auth (token as username, empty
password), rooted at ``<base_url>/v2`` and bounded by a 30 second timeout.
Non-2xx/3xx responses become :class:`RequestError` with ``kind=API``.
There are no retries; 429 is surfaced like any other 4xx.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx

from honeybadger_mcp.hbapi.alarms import AlarmsService
from honeybadger_mcp.hbapi.dashboards import DashboardsService
from honeybadger_mcp.hbapi.errors import ErrorKind, RequestError, wrap_response_error
from honeybadger_mcp.hbapi.faults import FaultsService
from honeybadger_mcp.hbapi.insights import InsightsService
from honeybadger_mcp.hbapi.projects import ProjectsService

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.honeybadger.io"
DEFAULT_TIMEOUT = 30.0
API_PREFIX = "/v2"

QueryParams = Mapping[str, str | int]


class HoneybadgerClient:
    """Process-wide API client holding one handle per resource family.

    Immutable after construction, so a single instance is shared by all
    concurrent tool handlers.
    """

    def __init__(
        self,
        auth_token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not auth_token:
            msg = "auth token is required"
            raise ValueError(msg)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = httpx.AsyncClient(
            auth=httpx.BasicAuth(auth_token, ""),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

        self.projects = ProjectsService(self)
        self.faults = FaultsService(self)
        self.insights = InsightsService(self)
        self.dashboards = DashboardsService(self)
        self.alarms = AlarmsService(self)

    async def __aenter__(self) -> HoneybadgerClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{API_PREFIX}{path}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: QueryParams | None = None,
        body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` when a successful response has an empty body (the
        update and delete endpoints do this).  Query parameters with empty
        values must already be filtered out by the caller.
        """
        content: bytes | None = None
        if body is not None:
            try:
                content = json.dumps(body).encode()
            except (TypeError, ValueError) as exc:
                raise RequestError(ErrorKind.MARSHAL, f"failed to marshal request body: {exc}") from exc

        query = sorted((k, str(v)) for k, v in params.items()) if params else None
        t0 = time.monotonic()
        try:
            # httpx limits each phase separately; this bounds the whole exchange.
            async with asyncio.timeout(self.timeout):
                response = await self._http.request(method, self.url_for(path), params=query, content=content)
        except asyncio.CancelledError:
            logger.info("api_request_cancelled", extra={"method": method, "path": path})
            raise
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise RequestError(ErrorKind.TRANSPORT, f"request timed out after {self.timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise RequestError(ErrorKind.TRANSPORT, f"request failed: {exc}") from exc

        duration_ms = round((time.monotonic() - t0) * 1000, 1)
        logger.debug(
            "api_request",
            extra={"method": method, "path": path, "status": response.status_code, "duration_ms": duration_ms},
        )

        if not 200 <= response.status_code < 400:
            raise wrap_response_error(response)

        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RequestError(ErrorKind.DECODE, f"failed to decode response: {exc}") from exc

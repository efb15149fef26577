"""Request option containers and response shapes for the Honeybadger API.

Response shapes are TypedDicts: the client hands back decoded JSON and the
server re-emits it, so only the fields the server inspects are spelled out.
Request containers are dataclasses whose ``None`` fields are omitted from
the query string or request body (an unset field is never sent as null).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from typing import Any, NotRequired, TypedDict

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_PAGE_SIZE = 25

FAULT_ORDERS: tuple[str, ...] = ("recent", "frequent")
OCCURRENCE_PERIODS: tuple[str, ...] = ("hour", "day", "week", "month")
REPORT_TYPES: tuple[str, ...] = ("notices_by_class", "notices_by_location", "notices_by_user", "notices_per_day")

# ---------------------------------------------------------------------------
# Response shapes
# ---------------------------------------------------------------------------


class ListEnvelope(TypedDict):
    """``{results, links}`` wrapper used by the paginated list endpoints.

    ``links`` is passed through as the Service sent it.
    """

    results: list[Any]
    links: dict[str, Any]


class Project(TypedDict, total=False):
    id: int
    name: str
    active: bool
    created_at: str
    earliest_notice_at: str | None
    last_notice_at: str | None
    environments: list[Any]
    fault_count: int
    unresolved_fault_count: int
    token: str
    owner: dict[str, Any]
    sites: list[dict[str, Any]]
    teams: list[dict[str, Any]]
    users: list[dict[str, Any]]


class ProjectSummary(TypedDict):
    """Reduced project shape returned by ``list_projects``."""

    id: int | None
    name: str | None
    active: bool | None
    created_at: str | None
    last_notice_at: str | None
    fault_count: int | None
    unresolved_fault_count: int | None


class Fault(TypedDict, total=False):
    id: int
    klass: str
    message: str
    resolved: bool
    ignored: bool
    notices_count: int
    notices_count_in_range: int
    environment: str
    project_id: int
    tags: list[str]
    created_at: str
    last_notice_at: str | None


class BacktraceEntry(TypedDict, total=False):
    number: int | None
    file: str
    method: str
    source: dict[str, Any]
    context: str


class Notice(TypedDict, total=False):
    id: str
    fault_id: int
    message: str
    created_at: str
    environment: dict[str, Any]
    request: dict[str, Any]
    cookies: dict[str, Any]
    backtrace: list[BacktraceEntry]
    application_trace: list[BacktraceEntry]


class AffectedUser(TypedDict):
    user: str
    count: int


class FaultCountsEnvironment(TypedDict):
    environment: str
    resolved: bool
    ignored: bool
    count: int


class FaultCounts(TypedDict):
    total: int
    environments: list[FaultCountsEnvironment]


class InsightsQueryMeta(TypedDict, total=False):
    query: str
    fields: list[str]
    schema: list[dict[str, Any]]
    rows: int
    total_rows: int
    start_at: str
    end_at: str


class InsightsQueryResponse(TypedDict):
    results: list[dict[str, Any]]
    meta: InsightsQueryMeta
    error: NotRequired[dict[str, Any]]


class OperationResult(TypedDict):
    """Synthesized payload for update/delete endpoints that return no body."""

    success: bool
    message: str


# [epoch_seconds, count]
OccurrenceCount = list[int]

# ---------------------------------------------------------------------------
# Query string helpers
# ---------------------------------------------------------------------------


def to_epoch(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp())


def to_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat().replace("+00:00", "Z")


def build_query(**params: str | int | None) -> dict[str, str | int]:
    """Drop unset, empty and zero values; everything else is sent."""
    return {k: v for k, v in params.items() if v is not None and v != "" and v != 0}


def compact(obj: Any) -> dict[str, Any]:
    """Serialize a request dataclass, omitting fields left as ``None``."""
    return {f.name: getattr(obj, f.name) for f in fields(obj) if getattr(obj, f.name) is not None}


# ---------------------------------------------------------------------------
# Request options
# ---------------------------------------------------------------------------


@dataclass
class FaultListOptions:
    """Filters for listing and counting faults.

    The fault endpoints expect timestamps as Unix seconds.  ``limit``,
    ``order`` and ``page`` are ignored by the counts endpoint.
    """

    q: str = ""
    created_after: datetime | None = None
    occurred_after: datetime | None = None
    occurred_before: datetime | None = None
    limit: int = 0
    order: str = ""
    page: int = 0

    def filter_params(self) -> dict[str, str | int]:
        return build_query(
            q=self.q,
            created_after=to_epoch(self.created_after) if self.created_after else None,
            occurred_after=to_epoch(self.occurred_after) if self.occurred_after else None,
            occurred_before=to_epoch(self.occurred_before) if self.occurred_before else None,
        )

    def to_params(self) -> dict[str, str | int]:
        params = self.filter_params()
        params.update(build_query(limit=min(self.limit, MAX_PAGE_SIZE), order=self.order, page=self.page))
        return params


@dataclass
class FaultListNoticesOptions:
    created_after: datetime | None = None
    created_before: datetime | None = None
    limit: int = 0

    def to_params(self) -> dict[str, str | int]:
        return build_query(
            created_after=to_epoch(self.created_after) if self.created_after else None,
            created_before=to_epoch(self.created_before) if self.created_before else None,
            limit=min(self.limit, MAX_PAGE_SIZE),
        )


@dataclass
class OccurrenceCountOptions:
    period: str = ""
    environment: str = ""

    def to_params(self) -> dict[str, str | int]:
        return build_query(period=self.period, environment=self.environment)


@dataclass
class ReportOptions:
    start: datetime | None = None
    stop: datetime | None = None
    environment: str = ""

    def to_params(self) -> dict[str, str | int]:
        return build_query(
            start=to_rfc3339(self.start) if self.start else None,
            stop=to_rfc3339(self.stop) if self.stop else None,
            environment=self.environment,
        )


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


@dataclass
class ProjectRequest:
    """Body of ``{project: ...}`` for create and update.

    Every field is optional at this layer; ``name`` is required for create
    by the tool handler.
    """

    name: str | None = None
    resolve_errors_on_deploy: bool | None = None
    disable_public_links: bool | None = None
    user_url: str | None = None
    source_url: str | None = None
    purge_days: int | None = None
    user_search_field: str | None = None

    def to_body(self) -> dict[str, Any]:
        return {"project": compact(self)}


@dataclass
class InsightsQueryRequest:
    query: str
    ts: str | None = None
    timezone: str | None = None

    def to_body(self) -> dict[str, Any]:
        return compact(self)


@dataclass
class DashboardRequest:
    title: str
    widgets: list[Any] = field(default_factory=list)
    default_ts: str | None = None

    def to_body(self) -> dict[str, Any]:
        return {"dashboard": compact(self)}


@dataclass
class AlarmRequest:
    name: str
    query: str
    evaluation_period: str
    trigger_config: dict[str, Any]
    description: str | None = None
    stream_ids: list[str] | None = None
    lookback_lag: str | None = None

    def to_body(self) -> dict[str, Any]:
        return {"alarm": compact(self)}

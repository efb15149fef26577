"""Tests for query-string helpers and request containers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from honeybadger_mcp.hbapi.types import (
    AlarmRequest,
    FaultListNoticesOptions,
    FaultListOptions,
    ProjectRequest,
    ReportOptions,
    build_query,
    compact,
    to_epoch,
    to_rfc3339,
)


class TestBuildQuery:
    def test_drops_empty_values(self) -> None:
        assert build_query(q="", limit=0, page=None, order="recent") == {"order": "recent"}

    def test_keeps_set_values(self) -> None:
        assert build_query(q="x", limit=3) == {"q": "x", "limit": 3}


class TestTimestamps:
    def test_epoch_of_aware_value(self) -> None:
        assert to_epoch(datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)) == 1700000000

    def test_naive_is_utc(self) -> None:
        assert to_epoch(datetime(2023, 11, 14, 22, 13, 20)) == 1700000000
        assert to_rfc3339(datetime(2024, 1, 1)) == "2024-01-01T00:00:00Z"

    def test_rfc3339_keeps_offset(self) -> None:
        value = datetime(2024, 1, 1, 9, 30, tzinfo=timezone(timedelta(hours=2)))
        assert to_rfc3339(value) == "2024-01-01T09:30:00+02:00"


class TestFaultListOptions:
    def test_limit_capped(self) -> None:
        assert FaultListOptions(limit=500).to_params() == {"limit": 25}

    def test_defaults_send_nothing(self) -> None:
        assert FaultListOptions().to_params() == {}

    def test_filter_params_exclude_paging(self) -> None:
        options = FaultListOptions(q="boom", limit=5, order="frequent", page=3)
        assert options.filter_params() == {"q": "boom"}
        assert options.to_params() == {"q": "boom", "limit": 5, "order": "frequent", "page": 3}

    def test_notice_limit_capped(self) -> None:
        assert FaultListNoticesOptions(limit=40).to_params() == {"limit": 25}


class TestRequestBodies:
    def test_compact_omits_none_only(self) -> None:
        req = ProjectRequest(name="", resolve_errors_on_deploy=False, purge_days=0)
        assert compact(req) == {"name": "", "resolve_errors_on_deploy": False, "purge_days": 0}

    def test_alarm_body_keeps_empty_stream_ids(self) -> None:
        req = AlarmRequest(name="n", query="q", evaluation_period="1m", trigger_config={}, stream_ids=[])
        assert req.to_body()["alarm"]["stream_ids"] == []

    def test_report_options(self) -> None:
        options = ReportOptions(start=datetime(2024, 1, 1, tzinfo=UTC), environment="production")
        assert options.to_params() == {"start": "2024-01-01T00:00:00Z", "environment": "production"}

"""Tests for argument accessors and validation helpers shared by the tools."""

from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

from honeybadger_mcp.mcp_tools.common import (
    MARSHAL_FAILURE,
    _get_bool,
    _get_int,
    _get_optional_bool,
    _get_optional_int,
    _get_string,
    _parse_json_param,
    _parse_timestamp,
    _require_id,
    _result,
    _validate_int_range,
)
from tests.mcp._helpers import _err


class TestAccessors:
    @pytest.mark.parametrize(("value", "expected"), [(5, 5), (5.9, 5), ("12", 12), ("x", 0), (True, 0), (None, 0)])
    def test_get_int(self, value: object, expected: int) -> None:
        assert _get_int({"n": value}, "n") == expected

    def test_get_string_ignores_other_types(self) -> None:
        assert _get_string({"s": 3}, "s") == ""

    @pytest.mark.parametrize(("value", "expected"), [(True, True), ("false", False), ("1", True), (0, False), ("nah", False)])
    def test_get_bool(self, value: object, expected: bool) -> None:
        assert _get_bool({"b": value}, "b") is expected

    def test_optional_bool_distinguishes_unset(self) -> None:
        assert _get_optional_bool({}, "b") == (None, None)
        assert _get_optional_bool({"b": False}, "b") == (False, None)
        assert _get_optional_bool({"b": "TRUE"}, "b") == (True, None)

    @pytest.mark.parametrize("value", ["yes", 1, 0.0, [], {}])
    def test_optional_bool_rejects_non_booleans(self, value: object) -> None:
        result, err = _get_optional_bool({"b": value}, "b")
        assert result is None
        assert err is not None
        assert _err(err) == "b must be a boolean"

    @pytest.mark.parametrize(("value", "expected"), [(7, 7), (30.0, 30), (" 14 ", 14), ("-1", -1)])
    def test_optional_int(self, value: object, expected: int) -> None:
        assert _get_optional_int({"n": value}, "n") == (expected, None)

    @pytest.mark.parametrize("value", ["abc", "1.5", "--1", 2.5, True, "\u00b2", []])
    def test_optional_int_rejects_non_integers(self, value: object) -> None:
        result, err = _get_optional_int({"n": value}, "n")
        assert result is None
        assert err is not None
        assert _err(err) == "n must be an integer"


class TestValidation:
    def test_zero_is_unset(self) -> None:
        assert _validate_int_range(0, "limit", 1, 25) is None

    def test_out_of_range(self) -> None:
        result = _validate_int_range(30, "limit", 1, 25)
        assert result is not None
        assert _err(result) == "limit must be <= 25"

    def test_require_id(self) -> None:
        assert _require_id({"project_id": 4}) == (4, None)
        _, err = _require_id({})
        assert err is not None
        assert _err(err) == "project_id is required"


class TestTimestamps:
    def test_rfc3339(self) -> None:
        assert _parse_timestamp({"t": "2024-01-01T12:00:00Z"}, "t") == datetime(2024, 1, 1, 12, tzinfo=UTC)

    def test_naive_is_utc(self) -> None:
        assert _parse_timestamp({"t": "2024-01-01T12:00:00"}, "t") == datetime(2024, 1, 1, 12, tzinfo=UTC)

    def test_date_only_rejected(self) -> None:
        assert _parse_timestamp({"t": "2024-01-01"}, "t") is None

    def test_epoch_only_when_allowed(self) -> None:
        assert _parse_timestamp({"t": "1700000000"}, "t") is None
        assert _parse_timestamp({"t": "1700000000"}, "t", allow_epoch=True) == datetime.fromtimestamp(1700000000, tz=UTC)

    def test_empty_is_unset(self) -> None:
        assert _parse_timestamp({"t": ""}, "t") is None

    @pytest.mark.parametrize("value", ["99999999999999999999", "\u00b2", 1e300, math.inf, math.nan, -1e300])
    def test_unrepresentable_epoch_is_unset(self, value: object) -> None:
        assert _parse_timestamp({"t": value}, "t", allow_epoch=True) is None


class TestJsonParam:
    def test_string_decoded(self) -> None:
        assert _parse_json_param({"w": "[1]"}, "w", list) == ([1], None)

    def test_wrong_type(self) -> None:
        _, err = _parse_json_param({"w": 5}, "w", list)
        assert err is not None
        assert _err(err) == "Failed to parse w JSON: expected a JSON string"


def test_unmarshalable_result() -> None:
    assert _err(_result({"x": math.inf})) == MARSHAL_FAILURE

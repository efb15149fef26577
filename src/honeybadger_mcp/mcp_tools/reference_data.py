"""Markdown reference served by ``get_insights_reference``.

Agents are told to read this before writing BadgerQL, dashboard widgets or
alarm trigger configs.
"""

from __future__ import annotations

BADGERQL = """\
## BadgerQL

BadgerQL is a pipeline language: each line is a function applied to the
output of the previous one, separated by newlines or `|`.

Events are stored in streams.  Every event has `ts` (timestamp) and
`event_type::str`; error notices have `event_type::str == "notice"`.
Fields are referenced with an explicit type suffix when the type is not
known: `user_id::int`, `path::str`, `duration::float`.

### Functions

| Function | Purpose | Example |
|---|---|---|
| `fields` | Select fields (and computed expressions) | `fields path::str, duration::float` |
| `filter` | Keep rows matching a condition | `filter event_type::str == "request"` |
| `stats` | Aggregate, optionally grouped with `by` | `stats count() by path::str` |
| `sort` | Order rows | `sort count desc` |
| `limit` | Cap the number of rows | `limit 20` |
| `parse` | Extract fields from a string with a pattern | `parse message::str "/user/{id}"` |
| `only` | Like `fields` but drops everything else | `only ts, message::str` |

### Aggregations

`count()`, `count_distinct(field)`, `sum(field)`, `avg(field)`, `min(field)`,
`max(field)`, `percentile(95, field)`, `unique(field)`.

### Time bucketing

`stats count() by bin(1h) as time` groups by hour; combine with `sort time`
for line charts.  The query window comes from the `ts` argument of
`query_insights` (for example `PT3H`, `P1D`, `today`, `week`), not from the
query text.

### Examples

Errors per class over the last day:

    filter event_type::str == "notice"
    | stats count() by class::str
    | sort count desc

Slowest endpoints:

    filter event_type::str == "request"
    | stats avg(duration::float) as avg_ms, count() by path::str
    | sort avg_ms desc
    | limit 10

A response with an `error` object means the query could not run; fix the
query and retry.
"""

DASHBOARDS = """\
## Dashboards

`create_dashboard` and `update_dashboard` take `widgets` as a JSON-encoded
array.  Each widget object has:

| Key | Required | Description |
|---|---|---|
| `type` | yes | `insights_vis`, `alarms`, `errors`, `deployments`, `checkins` or `uptime` |
| `grid` | no | Position and size: `{"x": 0, "y": 0, "w": 6, "h": 4}` on a 12-column grid |
| `presentation` | no | `{"title": "...", "subtitle": "..."}` |
| `config` | no | Type-specific settings |

For `insights_vis` widgets, `config` holds:

- `query`: a BadgerQL string (see the BadgerQL section)
- `vis`: `{"view": "line" | "bar" | "table" | "number" | "pie", "chart_config": {...}}`

`default_ts` sets the dashboard's initial time range as an ISO 8601
duration (`PT3H`, `P1D`) or a keyword (`today`, `yesterday`, `week`,
`month`).

Example `widgets` value:

    [
      {
        "type": "insights_vis",
        "grid": {"x": 0, "y": 0, "w": 12, "h": 4},
        "presentation": {"title": "Errors per hour"},
        "config": {
          "query": "filter event_type::str == \\"notice\\" | stats count() by bin(1h) as time | sort time",
          "vis": {"view": "line"}
        }
      },
      {"type": "errors", "grid": {"x": 0, "y": 4, "w": 6, "h": 4}}
    ]

`update_dashboard` replaces the whole widget list; fetch the dashboard with
`get_dashboard` first and send back the widgets you want to keep.
"""

ALARMS = """\
## Alarms

An alarm runs a BadgerQL `query` every `evaluation_period` and fires when
the result matches its `trigger_config`.  The query is wrapped to count
result rows, so write it as a filter rather than an aggregation:

    filter event_type::str == "notice" and environment::str == "production"

| Parameter | Description |
|---|---|
| `name` | Display name |
| `query` | BadgerQL filter query |
| `evaluation_period` | How often to evaluate: `1m` minimum, e.g. `5m`, `1h`, `1d` |
| `trigger_config` | JSON object, see below |
| `lookback_lag` | Delay before evaluating so late data can arrive, e.g. `1m` or `0s` |
| `stream_ids` | JSON array of streams to query (default `["default"]`) |
| `description` | Free text |

### trigger_config

    {"type": "alert_result_count", "config": {"operator": "gt", "value": 10}}

`operator` is one of `gt`, `gte`, `lt`, `lte`, `eq`.  The alarm fires when
the row count for one evaluation period compares true against `value`.

`get_alarm_history` returns past evaluations that changed the alarm state,
newest first, paginated with `page`.
"""

SECTIONS: dict[str, str] = {
    "badgerql": BADGERQL,
    "dashboards": DASHBOARDS,
    "alarms": ALARMS,
}

HEADER = "# Honeybadger Insights reference\n\n"


def render(section: str = "") -> str:
    """Return one section, or the whole reference when *section* is empty."""
    if section:
        return HEADER + SECTIONS[section]
    return HEADER + "\n".join(SECTIONS.values())

"""Startup configuration.

Values come from (highest first) CLI flags or environment variables, both
resolved by click, then a JSON config file, then defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from honeybadger_mcp.hbapi import DEFAULT_BASE_URL
from honeybadger_mcp.logging import is_known_level

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".honeybadger-mcp-server.json"
DEFAULT_LOG_LEVEL = "info"

ENV_AUTH_TOKEN = "HONEYBADGER_PERSONAL_AUTH_TOKEN"
ENV_API_URL = "HONEYBADGER_API_URL"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_READ_ONLY = "HONEYBADGER_READ_ONLY"
ENV_LOG_FILE = "HONEYBADGER_LOG_FILE"

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


class ConfigError(ValueError):
    """Raised when the startup configuration is unusable."""


@dataclass
class Config:
    auth_token: str = ""
    api_url: str = DEFAULT_BASE_URL
    log_level: str = DEFAULT_LOG_LEVEL
    read_only: bool = True
    log_file: Path | None = None

    def validate(self) -> None:
        if not self.auth_token:
            msg = "auth-token is required"
            raise ConfigError(msg)
        if not self.api_url:
            msg = "api-url must not be empty"
            raise ConfigError(msg)
        if not is_known_level(self.log_level):
            msg = f"unknown log-level: {self.log_level!r} (expected debug, info, warn or error)"
            raise ConfigError(msg)


def default_config_path() -> Path:
    return Path.home() / CONFIG_FILENAME


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a JSON config file.  Returns ``{}`` if missing or corrupt."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read %s, using defaults: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return {}
    # Accept both "auth-token" and "auth_token"
    return {str(k).replace("-", "_"): v for k, v in data.items()}


def _coerce_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    msg = f"{name} must be a boolean, got {value!r}"
    raise ConfigError(msg)


def load_config(
    auth_token: str | None = None,
    api_url: str | None = None,
    log_level: str | None = None,
    read_only: bool | None = None,
    log_file: Path | str | None = None,
    config_path: Path | None = None,
) -> Config:
    """Merge explicit values over the config file over defaults.

    ``None`` means "not given"; the result is validated before it is
    returned.
    """
    file_values = read_config_file(config_path or default_config_path())

    def pick(explicit: Any, key: str, default: Any) -> Any:
        if explicit is not None:
            return explicit
        return file_values.get(key, default)

    raw_log_file = pick(log_file, "log_file", None)
    config = Config(
        auth_token=str(pick(auth_token, "auth_token", "")).strip(),
        api_url=str(pick(api_url, "api_url", DEFAULT_BASE_URL)).strip(),
        log_level=str(pick(log_level, "log_level", DEFAULT_LOG_LEVEL)).strip().lower(),
        read_only=_coerce_bool(pick(read_only, "read_only", True), "read-only"),
        log_file=Path(raw_log_file).expanduser() if raw_log_file else None,
    )
    config.validate()
    return config

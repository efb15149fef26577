"""Tests for startup configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from honeybadger_mcp.config import Config, ConfigError, load_config, read_config_file
from honeybadger_mcp.hbapi import DEFAULT_BASE_URL


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


class TestReadConfigFile:
    def test_missing_file(self, config_file: Path) -> None:
        assert read_config_file(config_file) == {}

    def test_corrupt_file(self, config_file: Path) -> None:
        config_file.write_text("{not json")
        assert read_config_file(config_file) == {}

    def test_non_object(self, config_file: Path) -> None:
        config_file.write_text("[1, 2]")
        assert read_config_file(config_file) == {}

    def test_dashed_keys_normalized(self, config_file: Path) -> None:
        config_file.write_text(json.dumps({"auth-token": "t", "read_only": False}))
        assert read_config_file(config_file) == {"auth_token": "t", "read_only": False}


class TestLoadConfig:
    def test_defaults(self, config_file: Path) -> None:
        config = load_config(auth_token="tok", config_path=config_file)
        assert config == Config(auth_token="tok", api_url=DEFAULT_BASE_URL, log_level="info", read_only=True)

    def test_token_required(self, config_file: Path) -> None:
        with pytest.raises(ConfigError, match="auth-token is required"):
            load_config(config_path=config_file)

    def test_blank_token_rejected(self, config_file: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(auth_token="   ", config_path=config_file)

    def test_file_values_used(self, config_file: Path) -> None:
        config_file.write_text(
            json.dumps({"auth-token": "from-file", "api-url": "https://eu-api.honeybadger.io", "read-only": "false"})
        )
        config = load_config(config_path=config_file)
        assert config.auth_token == "from-file"
        assert config.api_url == "https://eu-api.honeybadger.io"
        assert config.read_only is False

    def test_explicit_overrides_file(self, config_file: Path) -> None:
        config_file.write_text(json.dumps({"auth_token": "from-file", "log_level": "debug", "read_only": False}))
        config = load_config(auth_token="flag", log_level="WARN", read_only=True, config_path=config_file)
        assert config.auth_token == "flag"
        assert config.log_level == "warn"
        assert config.read_only is True

    def test_unknown_log_level(self, config_file: Path) -> None:
        with pytest.raises(ConfigError, match="unknown log-level"):
            load_config(auth_token="t", log_level="verbose", config_path=config_file)

    def test_bad_read_only_value(self, config_file: Path) -> None:
        config_file.write_text(json.dumps({"read_only": "maybe"}))
        with pytest.raises(ConfigError, match="read-only must be a boolean"):
            load_config(auth_token="t", config_path=config_file)

    def test_empty_api_url(self, config_file: Path) -> None:
        with pytest.raises(ConfigError, match="api-url"):
            load_config(auth_token="t", api_url=" ", config_path=config_file)

    def test_log_file_path(self, config_file: Path, tmp_path: Path) -> None:
        config = load_config(auth_token="t", log_file=str(tmp_path / "hb.log"), config_path=config_file)
        assert config.log_file == tmp_path / "hb.log"

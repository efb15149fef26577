"""Honeybadger MCP server: exposes the Honeybadger REST API as MCP tools."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("honeybadger-mcp-server")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from honeybadger_mcp.config import Config, ConfigError, load_config

__all__ = ["Config", "ConfigError", "__version__", "load_config"]

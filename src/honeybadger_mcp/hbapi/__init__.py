"""Client for the Honeybadger REST API (v2)."""

from honeybadger_mcp.hbapi.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HoneybadgerClient
from honeybadger_mcp.hbapi.errors import ErrorKind, RequestError

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "ErrorKind", "HoneybadgerClient", "RequestError"]

"""Structured JSON logging for the Honeybadger MCP server.

Records go to stderr (stdout carries the MCP protocol) and, optionally, to
a rotating JSONL file (5MB, 3 backups).
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOGGER_NAME = "honeybadger_mcp"
_setup_lock = threading.Lock()
_MAX_BYTES = 5 * 1024 * 1024  # 5MB
_BACKUP_COUNT = 3

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# (record attribute, JSON key)
_EXTRA_FIELDS = (
    ("tool", "tool"),
    ("args_data", "args"),
    ("duration_ms", "duration_ms"),
    ("error", "error"),
    ("status", "status"),
    ("session_id", "session_id"),
    ("method", "method"),
    ("path", "path"),
)


def parse_log_level(name: str | None) -> int:
    """Map a level name to a ``logging`` level; unknown names mean INFO."""
    return _LEVELS.get((name or "").strip().lower(), logging.INFO)


def is_known_level(name: str) -> bool:
    return name.strip().lower() in _LEVELS


class _JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for attr, key in _EXTRA_FIELDS:
            if hasattr(record, attr):
                entry[key] = getattr(record, attr)
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        return json.dumps(entry, default=str)


def setup_logging(level: str = "info", log_file: Path | None = None) -> logging.Logger:
    """Configure the ``honeybadger_mcp`` logger.

    Safe to call more than once: existing handlers are reused and only the
    level is updated.  A file handler pointing at a different path is
    replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)

    with _setup_lock:
        logger.setLevel(parse_log_level(level))
        logger.propagate = False

        if not any(type(h) is logging.StreamHandler for h in logger.handlers):
            stream = logging.StreamHandler(sys.stderr)
            stream.setFormatter(_JsonFormatter())
            logger.addHandler(stream)

        if log_file is None:
            return logger

        target_filename = os.path.abspath(str(log_file))
        for h in logger.handlers[:]:
            if not isinstance(h, RotatingFileHandler):
                continue
            if h.baseFilename == target_filename:
                return logger
            logger.removeHandler(h)
            h.close()

        handler = RotatingFileHandler(
            str(log_file),
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
        )
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
    return logger

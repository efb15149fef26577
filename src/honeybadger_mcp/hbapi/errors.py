"""Typed errors raised by the Honeybadger REST client."""

from __future__ import annotations

import json
from enum import StrEnum
from http import HTTPStatus
from typing import Any

import httpx


class ErrorKind(StrEnum):
    TRANSPORT = "transport"
    API = "api"
    DECODE = "decode"
    MARSHAL = "marshal"


def error_code_for_status(status_code: int) -> str:
    """Map an HTTP status to a short symbolic code for logs and error payloads."""
    match status_code:
        case 400:
            return "bad_request"
        case 401:
            return "unauthorized"
        case 403:
            return "forbidden"
        case 404:
            return "not_found"
        case 422:
            return "unprocessable"
        case 429:
            return "rate_limited"
    if 400 <= status_code < 500:
        return "bad_request"
    return "internal_error"


class RequestError(Exception):
    """A failed call to the Honeybadger API.

    ``kind`` says where the failure happened.  For ``ErrorKind.API`` the
    HTTP status and the (parsed, when possible) response body are kept so
    they can be logged; ``str(err)`` is always the human-readable message.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.body = body

    @property
    def code(self) -> str:
        if self.kind is ErrorKind.API and self.status_code is not None:
            return error_code_for_status(self.status_code)
        return f"{self.kind}_error"

    def __repr__(self) -> str:
        return f"RequestError(kind={self.kind!s}, status_code={self.status_code!r}, message={self.message!r})"


def _status_text(status_code: int) -> str:
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = "Unknown Status"
    return f"HTTP {status_code}: {phrase}"


def wrap_response_error(response: httpx.Response) -> RequestError:
    """Build an API error from a non-success response.

    The message is the first string among the body's ``message``, ``error``
    and ``errors`` fields, falling back to the HTTP status text.
    """
    body: Any = response.text
    message = _status_text(response.status_code)
    if body:
        try:
            body = json.loads(body)
        except ValueError:
            pass
    if isinstance(body, dict):
        for key in ("message", "error", "errors"):
            value = body.get(key)
            if isinstance(value, str) and value:
                message = value
                break
    return RequestError(ErrorKind.API, message, status_code=response.status_code, body=body if body != "" else None)

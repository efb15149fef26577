"""Shared pytest fixtures for honeybadger_mcp tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import pytest
from click.testing import CliRunner

from honeybadger_mcp.hbapi import HoneybadgerClient
from tests._fakes import TEST_BASE_URL, TEST_TOKEN, FakeHoneybadger


@pytest.fixture
def fake_api() -> FakeHoneybadger:
    return FakeHoneybadger()


@pytest.fixture
async def hb_client(fake_api: FakeHoneybadger) -> AsyncGenerator[HoneybadgerClient, None]:
    """HoneybadgerClient wired to the fake API."""
    client = HoneybadgerClient(TEST_TOKEN, TEST_BASE_URL, transport=fake_api.transport)
    yield client
    await client.aclose()


@pytest.fixture
def mcp_api(fake_api: FakeHoneybadger, hb_client: HoneybadgerClient) -> Generator[FakeHoneybadger, None, None]:
    """Patch the MCP server globals with a fake-backed client, read-write mode."""
    import honeybadger_mcp.mcp_server as mcp_mod

    original_client = mcp_mod.client
    original_read_only = mcp_mod.read_only
    mcp_mod.client = hb_client
    mcp_mod.read_only = False

    yield fake_api

    mcp_mod.client = original_client
    mcp_mod.read_only = original_read_only


@pytest.fixture
def read_only_mode(mcp_api: FakeHoneybadger) -> FakeHoneybadger:
    import honeybadger_mcp.mcp_server as mcp_mod

    mcp_mod.read_only = True
    return mcp_api


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()

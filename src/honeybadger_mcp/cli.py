"""CLI for the Honeybadger MCP server.

Usage:
    honeybadger-mcp-server stdio                       # Serve MCP over stdio
    honeybadger-mcp-server stdio --no-read-only        # Also expose create/update/delete tools
    honeybadger-mcp-server tools                       # Print the tool catalog
    honeybadger-mcp-server tools --no-read-only --json
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from pathlib import Path

import click

from honeybadger_mcp import __version__
from honeybadger_mcp.config import (
    ENV_API_URL,
    ENV_AUTH_TOKEN,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_READ_ONLY,
    ConfigError,
    load_config,
)

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON config file (default: ~/.honeybadger-mcp-server.json)",
)
_read_only_option = click.option(
    "--read-only/--no-read-only",
    "read_only",
    default=None,
    envvar=ENV_READ_ONLY,
    help="Only expose tools that do not modify data (default: read-only)",
)


@click.group()
@click.version_option(version=__version__, prog_name="honeybadger-mcp-server")
def cli() -> None:
    """Honeybadger MCP server."""


@cli.command()
@click.option("--auth-token", envvar=ENV_AUTH_TOKEN, default=None, help="Honeybadger personal auth token")
@click.option("--api-url", envvar=ENV_API_URL, default=None, help="Honeybadger API base URL")
@click.option(
    "--log-level",
    envvar=ENV_LOG_LEVEL,
    default=None,
    help="Log level: debug, info, warn, error (default: info)",
)
@click.option(
    "--log-file",
    envvar=ENV_LOG_FILE,
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write JSON logs to this file (rotated at 5MB)",
)
@_read_only_option
@_config_option
def stdio(
    auth_token: str | None,
    api_url: str | None,
    log_level: str | None,
    log_file: Path | None,
    read_only: bool | None,
    config_path: Path | None,
) -> None:
    """Serve MCP over stdin/stdout."""
    try:
        config = load_config(
            auth_token=auth_token,
            api_url=api_url,
            log_level=log_level,
            read_only=read_only,
            log_file=log_file,
            config_path=config_path,
        )
    except ConfigError as exc:
        click.echo(f"configuration error: {exc}", err=True)
        sys.exit(1)

    from honeybadger_mcp.mcp_server import _run

    asyncio.run(_run(config))


@cli.command("tools")
@_read_only_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tools_cmd(read_only: bool | None, as_json: bool) -> None:
    """Print the tool catalog (no auth token needed)."""
    from honeybadger_mcp.mcp_server import _get_registry
    from honeybadger_mcp.mcp_tools.registry import is_read_only_tool

    effective = True if read_only is None else read_only
    tools = _get_registry().tools(read_only=effective)

    if as_json:
        data = [{"name": t.name, "read_only": is_read_only_tool(t), "description": t.description} for t in tools]
        click.echo(json_mod.dumps(data, indent=2))
        return

    width = max((len(t.name) for t in tools), default=0)
    for t in tools:
        flag = "ro" if is_read_only_tool(t) else "rw"
        click.echo(f"{t.name:<{width}}  {flag}  {t.description}")
    click.echo(f"\n{len(tools)} tools ({'read-only' if effective else 'read-write'})")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

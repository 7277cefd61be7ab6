"""Coda MCP CLI - command-line entry point for the Coda MCP server."""

import asyncio
import json
import logging
from functools import wraps

import click
from dotenv import load_dotenv

from . import __version__
from coda_mcp.sdk.client import CodaClient
from coda_mcp.sdk.config import load_settings, configure_logging, get_config_file_path
from coda_mcp.sdk.exceptions import CodaError

logger = logging.getLogger(__name__)


def handle_coda_errors(func):
    """Report CodaError as a clean CLI failure instead of a traceback."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CodaError as e:
            raise click.ClickException(e.message) from e
    return wrapper


@click.group()
@click.version_option(__version__, prog_name="coda-mcp")
def coda_mcp():
    """Coda MCP CLI.

    Run the Coda MCP server or inspect its configuration and tools.
    """
    pass


@coda_mcp.command()
@handle_coda_errors
def serve():
    """Run the MCP server over stdio."""
    from coda_mcp.mcp.server import serve as serve_stdio

    settings = load_settings()
    configure_logging(settings.log_level)
    settings.require_token()
    try:
        asyncio.run(serve_stdio(settings))
    except KeyboardInterrupt:
        pass


@coda_mcp.command()
@click.option('--json', 'as_json', is_flag=True, help='Output tool definitions as JSON.')
def tools(as_json):
    """List the tools the server exposes."""
    from coda_mcp.mcp.tools import build_registry

    # Listing tools never touches the network, so a placeholder token is enough.
    client = CodaClient(load_settings().api_token or "unset")
    definitions = build_registry(client).list_tools()
    asyncio.run(client.aclose())

    if as_json:
        click.echo(json.dumps([
            {
                "name": d.name,
                "description": d.description,
                "inputSchema": dict(d.input_schema),
            }
            for d in definitions
        ], indent=2))
        return

    for d in definitions:
        summary = d.description.splitlines()[0] if d.description else ""
        click.echo(f"{d.name:<28} {summary}")
    click.echo(f"\n{len(definitions)} tools")


@coda_mcp.command()
@handle_coda_errors
def whoami():
    """Show the Coda user that owns the configured API token."""
    settings = load_settings()
    configure_logging(settings.log_level)

    async def fetch():
        async with CodaClient(settings.require_token(), base_url=settings.base_url,
                              timeout=settings.timeout) as client:
            return await client.whoami()

    user = asyncio.run(fetch())
    click.echo(json.dumps(user, indent=2, ensure_ascii=False))


@coda_mcp.group()
def config():
    """Inspect coda-mcp configuration."""
    pass


@config.command('show')
def config_show():
    """Show the effective configuration (token masked)."""
    settings = load_settings()
    click.echo(f"Config file: {get_config_file_path()}")
    click.echo(f"API token:   {settings.masked_token or '(not set)'}")
    click.echo(f"Base URL:    {settings.base_url}")
    click.echo(f"Timeout:     {settings.timeout}s")
    click.echo(f"Log level:   {settings.log_level}")


def main():
    """Entry point for the CLI."""
    load_dotenv()
    coda_mcp()


if __name__ == "__main__":
    main()

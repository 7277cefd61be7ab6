"""Coda MCP Server - Exposes the Coda API as MCP tools over stdio.

The server holds one CodaClient (and with it one RateLimiter) for the life
of the process. Every tool call goes through the ToolRegistry, which turns
results and failures alike into a single text content block.
"""

import asyncio
import logging
import sys
from typing import Any, Optional

import mcp.types as types
from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from coda_mcp import __version__
from coda_mcp.sdk.client import CodaClient
from coda_mcp.sdk.config import Settings, load_settings, configure_logging
from coda_mcp.sdk.exceptions import CodaError

from .registry import ToolRegistry, ToolDefinition
from .tools import build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "coda-mcp"


def to_mcp_tool(definition: ToolDefinition) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=dict(definition.input_schema),
    )


def create_server(registry: ToolRegistry) -> Server:
    """Wire list_tools/call_tool of a low-level MCP server to `registry`."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(definition) for definition in registry.list_tools()]

    # Arguments are validated by the registry so failures come back as tool text.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        outcome = await registry.call_tool(name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=outcome.text)],
            isError=outcome.is_error,
        )

    return server


async def serve(settings: Settings) -> None:
    """Serve MCP requests on stdin/stdout until the host disconnects."""
    async with CodaClient(
        settings.require_token(),
        base_url=settings.base_url,
        timeout=settings.timeout,
    ) as client:
        registry = build_registry(client)
        server = create_server(registry)
        logger.info(f"Coda MCP server running on stdio ({len(registry)} tools)")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def run_server():
    """Run the MCP server with stdio transport."""
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except CodaError as e:
        logger.error(e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run_server()

"""Coda MCP CLI - inspect configuration and tools, or run the server."""

from coda_mcp import __version__

__all__ = ["__version__"]

"""Coda MCP - Model Context Protocol server for the Coda API.

This module exposes Coda docs, pages, tables, columns and rows as MCP tools
to LLM clients.
"""

from .registry import ToolRegistry, CallOutcome, ToolDefinition
from .server import create_server, run_server
from .tools import build_registry

__all__ = ["ToolRegistry", "CallOutcome", "ToolDefinition", "build_registry", "create_server", "run_server"]

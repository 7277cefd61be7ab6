"""coda-mcp - Coda Access over MCP.

Namespace package containing:
- coda_mcp.sdk: Rate-limited async client for the Coda REST API
- coda_mcp.cli: Command-line interface
- coda_mcp.mcp: Model Context Protocol server exposing Coda as tools
"""

__version__ = "0.1.0"

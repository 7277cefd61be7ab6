"""coda-mcp SDK - Core library for Coda API access.

This SDK provides an async, rate-limited client for the Coda REST API. It is
used by:
- The coda-mcp CLI
- The coda-mcp MCP server
- Third-party applications

Example usage:
    from coda_mcp.sdk import CodaClient

    async with CodaClient(api_token) as client:
        docs = await client.list_docs(limit=10)
        for doc in docs["items"]:
            print(f"{doc['name']}: {doc['id']}")
"""

from . import config
from .client import CodaClient
from .exceptions import CodaError, CodaAPIError, TransportError
from .rate_limiter import RateLimiter, RequestClass

__all__ = [
    "config",
    "CodaClient",
    "CodaError",
    "CodaAPIError",
    "TransportError",
    "RateLimiter",
    "RequestClass",
]

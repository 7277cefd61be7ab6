"""Tool tables for each Coda resource group, merged into one registry."""

import logging
from typing import Optional

from coda_mcp.sdk.client import CodaClient

from ..registry import ToolGroup, ToolRegistry
from .docs import create_doc_tools
from .pages import create_page_tools
from .tables import create_table_tools, create_column_tools
from .rows import create_row_tools

RESOURCE_GROUPS = (
    create_doc_tools,
    create_page_tools,
    create_table_tools,
    create_column_tools,
    create_row_tools,
)


def build_registry(client: CodaClient, logger: Optional[logging.Logger] = None) -> ToolRegistry:
    """Register every tool against `client` in one step; the result is immutable."""
    tools = ToolGroup(logger=logger)
    for register in RESOURCE_GROUPS:
        register(client, tools)
    return ToolRegistry(tools.handlers, logger=logger)


__all__ = ["build_registry", "RESOURCE_GROUPS"]

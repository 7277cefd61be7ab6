"""Table and column tools."""

from coda_mcp.sdk.client import CodaClient

from ..registry import ToolGroup
from ..schemas import ListTablesInput, GetTableInput, CreateTableInput, ListColumnsInput, GetColumnInput


def create_table_tools(client: CodaClient, tools: ToolGroup) -> None:

    @tools.tool("coda_list_tables", ListTablesInput)
    async def list_tables(params: ListTablesInput):
        """List all tables and views in a Coda document."""
        return await client.list_tables(params.doc_id, table_types=params.table_types, limit=params.limit)

    @tools.tool("coda_get_table", GetTableInput)
    async def get_table(params: GetTableInput):
        """Get details of a specific table in a Coda document."""
        return await client.get_table(params.doc_id, params.table_id_or_name)

    @tools.tool("coda_create_table", CreateTableInput)
    async def create_table(params: CreateTableInput):
        """Create a table with the given columns. Table creation through the API is limited upstream."""
        columns = [column.model_dump(exclude_none=True) for column in params.columns]
        return await client.create_table(params.doc_id, params.name, columns)


def create_column_tools(client: CodaClient, tools: ToolGroup) -> None:

    @tools.tool("coda_list_columns", ListColumnsInput)
    async def list_columns(params: ListColumnsInput):
        """List all columns in a Coda table."""
        return await client.list_columns(params.doc_id, params.table_id_or_name, limit=params.limit)

    @tools.tool("coda_get_column", GetColumnInput)
    async def get_column(params: GetColumnInput):
        """Get details of a specific column, including its format and formula."""
        return await client.get_column(params.doc_id, params.table_id_or_name, params.column_id_or_name)

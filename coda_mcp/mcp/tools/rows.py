"""Row tools. Every row mutation is applied asynchronously by Coda."""

from coda_mcp.sdk.client import CodaClient

from ..registry import ToolGroup
from ..schemas import (
    ListRowsInput,
    GetRowInput,
    InsertRowsInput,
    UpsertRowsInput,
    UpdateRowInput,
    DeleteRowInput,
    DeleteRowsInput,
)

ASYNC_NOTE = "Note: This operation is asynchronous and will be processed within seconds."
UPSERT_NOTE = "Note: This operation is asynchronous. If multiple rows match the key columns, ALL will be updated."


def create_row_tools(client: CodaClient, tools: ToolGroup) -> None:

    @tools.tool("coda_list_rows", ListRowsInput)
    async def list_rows(params: ListRowsInput):
        """List rows in a Coda table with optional filtering and pagination."""
        return await client.list_rows(
            params.doc_id,
            params.table_id_or_name,
            query=params.query,
            limit=params.limit,
            page_token=params.page_token,
            use_column_names=params.use_column_names,
            value_format=params.value_format,
            visible_only=params.visible_only,
        )

    @tools.tool("coda_get_row", GetRowInput)
    async def get_row(params: GetRowInput):
        """Get a specific row from a Coda table by ID or name."""
        return await client.get_row(
            params.doc_id,
            params.table_id_or_name,
            params.row_id_or_name,
            use_column_names=params.use_column_names,
            value_format=params.value_format,
        )

    @tools.tool("coda_insert_rows", InsertRowsInput, note=ASYNC_NOTE)
    async def insert_rows(params: InsertRowsInput):
        """
        Insert new rows into a Coda table. Only works with base tables, not views.

        Returns a request ID as the operation is asynchronous.
        """
        return await client.insert_rows(
            params.doc_id,
            params.table_id_or_name,
            [row.model_dump() for row in params.rows],
            disable_parsing=params.disable_parsing,
        )

    @tools.tool("coda_upsert_rows", UpsertRowsInput, note=UPSERT_NOTE)
    async def upsert_rows(params: UpsertRowsInput):
        """
        Insert or update rows in a Coda table based on key columns.

        If rows with matching key column values exist, they are updated;
        otherwise new rows are inserted. WARNING: If multiple rows match,
        ALL will be updated.
        """
        return await client.upsert_rows(
            params.doc_id,
            params.table_id_or_name,
            [row.model_dump() for row in params.rows],
            list(params.key_columns),
            disable_parsing=params.disable_parsing,
        )

    @tools.tool("coda_update_row", UpdateRowInput, note=ASYNC_NOTE)
    async def update_row(params: UpdateRowInput):
        """Update an existing row in a Coda table. Returns a request ID as the operation is asynchronous."""
        return await client.update_row(
            params.doc_id,
            params.table_id_or_name,
            params.row_id_or_name,
            [cell.model_dump() for cell in params.cells],
            disable_parsing=params.disable_parsing,
        )

    @tools.tool("coda_delete_row", DeleteRowInput, note=ASYNC_NOTE)
    async def delete_row(params: DeleteRowInput):
        """Delete a single row from a Coda table. Returns a request ID as the operation is asynchronous."""
        return await client.delete_row(params.doc_id, params.table_id_or_name, params.row_id_or_name)

    @tools.tool("coda_delete_rows", DeleteRowsInput, note=ASYNC_NOTE)
    async def delete_rows(params: DeleteRowsInput):
        """
        Delete multiple rows from a Coda table by their IDs.

        Returns a request ID as the operation is asynchronous.
        """
        return await client.delete_rows(params.doc_id, params.table_id_or_name, list(params.row_ids))

"""Account and document tools."""

from coda_mcp.sdk.client import CodaClient

from ..registry import ToolGroup
from ..schemas import WhoAmIInput, ListDocsInput, GetDocInput, CreateDocInput, DeleteDocInput


def create_doc_tools(client: CodaClient, tools: ToolGroup) -> None:

    @tools.tool("coda_whoami", WhoAmIInput)
    async def whoami(params: WhoAmIInput):
        """Get information about the user that owns the API token. Useful to check the connection."""
        return await client.whoami()

    @tools.tool("coda_list_docs", ListDocsInput)
    async def list_docs(params: ListDocsInput):
        """List all accessible Coda documents. Supports filtering by ownership and search query."""
        return await client.list_docs(
            is_owner=params.is_owner,
            query=params.query,
            source_doc=params.source_doc,
            limit=params.limit,
        )

    @tools.tool("coda_get_doc", GetDocInput)
    async def get_doc(params: GetDocInput):
        """Get details of a specific Coda document by ID or URL."""
        return await client.get_doc(params.doc_id)

    @tools.tool("coda_create_doc", CreateDocInput)
    async def create_doc(params: CreateDocInput):
        """Create a new Coda document, optionally copied from a source doc. Requires Doc Maker permissions."""
        return await client.create_doc(
            params.title,
            source_doc=params.source_doc,
            timezone=params.timezone,
            folder_id=params.folder_id,
        )

    @tools.tool(
        "coda_delete_doc",
        DeleteDocInput,
        render=lambda params, _: f"Successfully deleted document {params.doc_id}",
    )
    async def delete_doc(params: DeleteDocInput):
        """Delete a Coda document (moves to trash)."""
        return await client.delete_doc(params.doc_id)

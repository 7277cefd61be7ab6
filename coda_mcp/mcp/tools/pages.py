"""Page and page content tools."""

from coda_mcp.sdk.client import CodaClient

from ..registry import ToolGroup
from ..schemas import (
    ListPagesInput,
    GetPageInput,
    CreatePageInput,
    UpdatePageInput,
    DeletePageInput,
    GetPageContentInput,
    DeletePageContentInput,
)


def _deleted_content_message(params: DeletePageContentInput, _result) -> str:
    if params.element_ids:
        return f"Successfully deleted {len(params.element_ids)} element(s) from page {params.page_id_or_name}"
    return f"Successfully deleted all content from page {params.page_id_or_name}"


def create_page_tools(client: CodaClient, tools: ToolGroup) -> None:

    @tools.tool("coda_list_pages", ListPagesInput)
    async def list_pages(params: ListPagesInput):
        """List all pages in a Coda document."""
        return await client.list_pages(params.doc_id, limit=params.limit)

    @tools.tool("coda_get_page", GetPageInput)
    async def get_page(params: GetPageInput):
        """Get details of a specific page in a Coda document."""
        return await client.get_page(params.doc_id, params.page_id_or_name)

    @tools.tool("coda_create_page", CreatePageInput)
    async def create_page(params: CreatePageInput):
        """Create a new page in a Coda document with optional initial content."""
        page_content = None
        if params.page_content is not None:
            page_content = params.page_content.model_dump(by_alias=True, exclude_none=True)
        return await client.create_page(
            params.doc_id,
            params.name,
            subtitle=params.subtitle,
            icon_name=params.icon_name,
            image_url=params.image_url,
            parent_page_id_or_name=params.parent_page_id_or_name,
            page_content=page_content,
        )

    @tools.tool("coda_update_page", UpdatePageInput)
    async def update_page(params: UpdatePageInput):
        """
        Update an existing page in a Coda document.

        Can update metadata (name, subtitle, icon, image, visibility) and/or
        append, prepend or replace canvas content.
        """
        content_update = None
        if params.content_update is not None:
            content_update = params.content_update.model_dump(by_alias=True, exclude_none=True)
        return await client.update_page(
            params.doc_id,
            params.page_id_or_name,
            name=params.name,
            subtitle=params.subtitle,
            icon_name=params.icon_name,
            image_url=params.image_url,
            is_hidden=params.is_hidden,
            content_update=content_update,
        )

    @tools.tool(
        "coda_delete_page",
        DeletePageInput,
        render=lambda params, _: f"Successfully deleted page {params.page_id_or_name}",
    )
    async def delete_page(params: DeletePageInput):
        """Delete a page from a Coda document."""
        return await client.delete_page(params.doc_id, params.page_id_or_name)

    @tools.tool("coda_get_page_content", GetPageContentInput)
    async def get_page_content(params: GetPageContentInput):
        """
        Get a list of content elements from a page.

        Returns structured content items with their IDs, types, and content.
        """
        return await client.get_page_content(
            params.doc_id,
            params.page_id_or_name,
            limit=params.limit,
            content_format=params.content_format,
        )

    @tools.tool("coda_delete_page_content", DeletePageContentInput, render=_deleted_content_message)
    async def delete_page_content(params: DeletePageContentInput):
        """
        Delete content from a page.

        Delete specific elements by providing their IDs, or delete all content
        from the page by omitting elementIds.
        """
        return await client.delete_page_content(params.doc_id, params.page_id_or_name, params.element_ids)

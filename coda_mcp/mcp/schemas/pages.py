from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import DocId, NonEmptyStr, PageRef, ToolInput


class CanvasContent(BaseModel):
    format: Literal["html", "markdown"] = Field(description="Content format")
    content: str = Field(description="The actual content in HTML or Markdown")


class PageContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["canvas"] = Field("canvas", description='Content type (always "canvas")')
    canvas_content: CanvasContent = Field(alias="canvasContent", description="Canvas content object")


class ContentUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    insertion_mode: Optional[Literal["append", "prepend", "replace"]] = Field(
        None, alias="insertionMode",
        description='How to insert content: "append" to add to end, "prepend" to add to beginning, "replace" to replace all',
    )
    element_id: Optional[str] = Field(
        None, alias="elementId", description="Canvas element ID where content should be inserted"
    )
    canvas_content: CanvasContent = Field(alias="canvasContent", description="Canvas content to insert")


class ListPagesInput(ToolInput):
    doc_id: DocId
    limit: Optional[int] = Field(None, ge=1, le=100, description="Maximum number of pages to return")


class GetPageInput(ToolInput):
    doc_id: DocId
    page_id_or_name: PageRef


class CreatePageInput(ToolInput):
    doc_id: DocId
    name: NonEmptyStr = Field(description="Page name")
    subtitle: Optional[str] = Field(None, description="Page subtitle")
    icon_name: Optional[str] = Field(None, alias="iconName", description="Icon name for the page")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Header image URL")
    parent_page_id_or_name: Optional[str] = Field(
        None, alias="parentPageIdOrName", description="Parent page ID or name for creating subpages"
    )
    page_content: Optional[PageContent] = Field(None, alias="pageContent", description="Initial page content")


class UpdatePageInput(ToolInput):
    doc_id: DocId
    page_id_or_name: PageRef
    name: Optional[str] = Field(None, description="New page name")
    subtitle: Optional[str] = Field(None, description="New page subtitle")
    icon_name: Optional[str] = Field(None, alias="iconName", description="New icon name")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="New header image URL")
    is_hidden: Optional[bool] = Field(None, alias="isHidden", description="Whether the page should be hidden")
    content_update: Optional[ContentUpdate] = Field(
        None, alias="contentUpdate", description="Content to append, prepend, or replace"
    )


class DeletePageInput(ToolInput):
    doc_id: DocId
    page_id_or_name: PageRef


class GetPageContentInput(ToolInput):
    doc_id: DocId
    page_id_or_name: PageRef
    limit: Optional[int] = Field(
        None, ge=1, le=500, description="Maximum number of content items to return (1-500, default: 50)"
    )
    content_format: Optional[Literal["plainText"]] = Field(
        None, alias="contentFormat", description="The format to return content in (default: plainText)"
    )


class DeletePageContentInput(ToolInput):
    doc_id: DocId
    page_id_or_name: PageRef
    element_ids: Optional[List[str]] = Field(
        None, alias="elementIds",
        description="IDs of specific elements to delete. If omitted or empty, all content will be deleted.",
    )

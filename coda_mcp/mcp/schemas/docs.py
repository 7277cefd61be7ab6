from typing import Optional

from pydantic import Field

from .common import DocId, NonEmptyStr, ToolInput


class WhoAmIInput(ToolInput):
    pass


class ListDocsInput(ToolInput):
    is_owner: Optional[bool] = Field(None, alias="isOwner", description="Filter for documents owned by the user")
    query: Optional[str] = Field(None, description="Search query to filter documents")
    source_doc: Optional[str] = Field(None, alias="sourceDoc", description="Only return docs copied from this doc ID")
    limit: int = Field(25, ge=1, le=100, description="Maximum number of documents to return (default: 25, max: 100)")


class GetDocInput(ToolInput):
    doc_id: DocId


class CreateDocInput(ToolInput):
    title: NonEmptyStr = Field(description="Title for the new document")
    source_doc: Optional[str] = Field(None, alias="sourceDoc", description="Optional source document ID to copy from")
    timezone: Optional[str] = Field(None, description='Timezone for the document (e.g., "America/Los_Angeles")')
    folder_id: Optional[str] = Field(None, alias="folderId", description="Parent folder ID")


class DeleteDocInput(ToolInput):
    doc_id: DocId

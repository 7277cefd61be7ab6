"""Pydantic input models for every tool, grouped by resource."""

from .common import ToolInput
from .docs import WhoAmIInput, ListDocsInput, GetDocInput, CreateDocInput, DeleteDocInput
from .pages import (
    ListPagesInput,
    GetPageInput,
    CreatePageInput,
    UpdatePageInput,
    DeletePageInput,
    GetPageContentInput,
    DeletePageContentInput,
)
from .tables import ListTablesInput, GetTableInput, CreateTableInput, ListColumnsInput, GetColumnInput
from .rows import (
    ListRowsInput,
    GetRowInput,
    InsertRowsInput,
    UpsertRowsInput,
    UpdateRowInput,
    DeleteRowInput,
    DeleteRowsInput,
)

__all__ = [
    "ToolInput",
    "WhoAmIInput",
    "ListDocsInput",
    "GetDocInput",
    "CreateDocInput",
    "DeleteDocInput",
    "ListPagesInput",
    "GetPageInput",
    "CreatePageInput",
    "UpdatePageInput",
    "DeletePageInput",
    "GetPageContentInput",
    "DeletePageContentInput",
    "ListTablesInput",
    "GetTableInput",
    "CreateTableInput",
    "ListColumnsInput",
    "GetColumnInput",
    "ListRowsInput",
    "GetRowInput",
    "InsertRowsInput",
    "UpsertRowsInput",
    "UpdateRowInput",
    "DeleteRowInput",
    "DeleteRowsInput",
]

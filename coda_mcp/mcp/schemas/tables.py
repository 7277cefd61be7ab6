from typing import List, Optional

from pydantic import BaseModel, Field

from .common import ColumnRef, DocId, NonEmptyStr, TableRef, ToolInput


class ColumnSpec(BaseModel):
    name: NonEmptyStr = Field(description="Column name")
    type: Optional[str] = Field(None, description="Column format type (e.g., text, number, date)")


class ListTablesInput(ToolInput):
    doc_id: DocId
    table_types: Optional[List[str]] = Field(
        None, alias="tableTypes", description='Filter by table types (e.g., ["table", "view"])'
    )
    limit: Optional[int] = Field(None, ge=1, le=100, description="Maximum number of tables to return")


class GetTableInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef


class CreateTableInput(ToolInput):
    doc_id: DocId
    name: NonEmptyStr = Field(description="Table name")
    columns: List[ColumnSpec] = Field(min_length=1, description="Columns to create, in order")


class ListColumnsInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    limit: Optional[int] = Field(None, ge=1, le=100, description="Maximum number of columns to return")


class GetColumnInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    column_id_or_name: ColumnRef

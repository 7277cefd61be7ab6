from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from .common import DocId, NonEmptyStr, RowRef, TableRef, ToolInput

ValueFormat = Literal["simple", "simpleWithArrays", "rich"]


class Cell(BaseModel):
    column: str = Field(description="Column ID or name")
    value: Any = Field(description="Cell value")


class RowData(BaseModel):
    cells: List[Cell] = Field(description="Array of cells with column and value")


class ListRowsInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    query: Optional[str] = Field(None, description='Filter query, e.g. "Status":"Done"')
    limit: int = Field(25, ge=1, le=500, description="Maximum number of rows to return (default: 25, max: 500)")
    page_token: Optional[str] = Field(None, alias="pageToken", description="Pagination token from previous response")
    use_column_names: Optional[bool] = Field(
        None, alias="useColumnNames", description="Use column names instead of IDs in response"
    )
    value_format: Optional[ValueFormat] = Field(None, alias="valueFormat", description="Format for cell values")
    visible_only: Optional[bool] = Field(None, alias="visibleOnly", description="Only return visible rows")


class GetRowInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    row_id_or_name: RowRef
    use_column_names: Optional[bool] = Field(
        None, alias="useColumnNames", description="Use column names instead of IDs in response"
    )
    value_format: Optional[ValueFormat] = Field(None, alias="valueFormat", description="Format for cell values")


class InsertRowsInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    rows: List[RowData] = Field(description="Array of rows to insert")
    disable_parsing: Optional[bool] = Field(
        None, alias="disableParsing", description="Disable automatic parsing of cell values"
    )


class UpsertRowsInput(InsertRowsInput):
    rows: List[RowData] = Field(description="Array of rows to insert or update")
    key_columns: List[NonEmptyStr] = Field(
        min_length=1, alias="keyColumns",
        description="Column IDs or names to use as keys for matching existing rows",
    )


class UpdateRowInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    row_id_or_name: RowRef
    cells: List[Cell] = Field(description="Array of cells to update")
    disable_parsing: Optional[bool] = Field(
        None, alias="disableParsing", description="Disable automatic parsing of cell values"
    )


class DeleteRowInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    row_id_or_name: RowRef


class DeleteRowsInput(ToolInput):
    doc_id: DocId
    table_id_or_name: TableRef
    row_ids: List[NonEmptyStr] = Field(min_length=1, alias="rowIds", description="Array of row IDs to delete")

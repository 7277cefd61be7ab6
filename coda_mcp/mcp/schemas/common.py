"""Shared building blocks for tool input models."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

from coda_mcp.sdk.validators import resolve_doc_id


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Values are passed through unchanged; only empty or all-whitespace input is rejected.
NonEmptyStr = Annotated[str, StringConstraints(min_length=1), AfterValidator(_not_blank)]


class ToolInput(BaseModel):
    """Base for tool arguments: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


DocId = Annotated[
    NonEmptyStr,
    AfterValidator(resolve_doc_id),
    Field(alias="docId", description="Document ID or URL"),
]
PageRef = Annotated[NonEmptyStr, Field(alias="pageIdOrName", description="Page ID or name")]
TableRef = Annotated[NonEmptyStr, Field(alias="tableIdOrName", description="Table ID or name")]
ColumnRef = Annotated[NonEmptyStr, Field(alias="columnIdOrName", description="Column ID or name")]
RowRef = Annotated[NonEmptyStr, Field(alias="rowIdOrName", description="Row ID or name")]

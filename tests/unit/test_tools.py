"""
Unit tests for the tool registry and the Coda tool handlers.

Tools are invoked through ToolRegistry.call_tool() exactly as the MCP server
does, with the Coda API replaced by FakeCodaAPI.
"""

import asyncio
import json

import pytest
from pydantic import BaseModel

from coda_mcp.mcp.registry import CallOutcome, ToolGroup, ToolRegistry
from coda_mcp.mcp.tools import build_registry
from coda_mcp.mcp.tools.rows import ASYNC_NOTE, UPSERT_NOTE
from coda_mcp.sdk.rate_limiter import RequestClass

EXPECTED_TOOLS = [
    "coda_whoami",
    "coda_list_docs",
    "coda_get_doc",
    "coda_create_doc",
    "coda_delete_doc",
    "coda_list_pages",
    "coda_get_page",
    "coda_create_page",
    "coda_update_page",
    "coda_delete_page",
    "coda_get_page_content",
    "coda_delete_page_content",
    "coda_list_tables",
    "coda_get_table",
    "coda_create_table",
    "coda_list_columns",
    "coda_get_column",
    "coda_list_rows",
    "coda_get_row",
    "coda_insert_rows",
    "coda_upsert_rows",
    "coda_update_row",
    "coda_delete_row",
    "coda_delete_rows",
]


@pytest.fixture
def registry(client):
    return build_registry(client)


def call(registry, name, arguments=None) -> CallOutcome:
    return asyncio.run(registry.call_tool(name, arguments))


class TestListTools:

    def test_all_tools_registered_in_order(self, registry):
        assert [t.name for t in registry.list_tools()] == EXPECTED_TOOLS
        assert len(registry) == len(EXPECTED_TOOLS)
        assert "coda_get_row" in registry

    def test_list_tools_is_stable(self, registry):
        assert registry.list_tools() == registry.list_tools()

    def test_every_tool_has_description_and_object_schema(self, registry):
        for tool in registry.list_tools():
            assert tool.description, tool.name
            assert tool.input_schema["type"] == "object", tool.name

    def test_schema_uses_wire_names(self, registry):
        tools = {t.name: t for t in registry.list_tools()}
        schema = tools["coda_upsert_rows"].input_schema

        assert set(schema["required"]) == {"docId", "tableIdOrName", "rows", "keyColumns"}
        assert "disableParsing" in schema["properties"]

    def test_limit_bounds_in_schema(self, registry):
        tools = {t.name: t for t in registry.list_tools()}
        limit = tools["coda_list_rows"].input_schema["properties"]["limit"]

        assert limit["minimum"] == 1
        assert limit["maximum"] == 500
        assert limit["default"] == 25


class TestDispatch:

    def test_unknown_tool(self, registry, coda_api):
        outcome = call(registry, "coda_frobnicate", {})

        assert outcome.is_error
        assert outcome.text == "Error: Unknown tool: coda_frobnicate"
        assert coda_api.requests == []

    def test_success_is_pretty_printed_json(self, registry, coda_api):
        coda_api.respond("GET", "/docs/doc1", json={"id": "doc1", "name": "Café"})

        outcome = call(registry, "coda_get_doc", {"docId": "doc1"})

        assert not outcome.is_error
        assert outcome.text == json.dumps({"id": "doc1", "name": "Café"}, indent=2, ensure_ascii=False)

    def test_missing_required_argument_makes_no_request(self, registry, coda_api):
        outcome = call(registry, "coda_get_row", {"tableIdOrName": "Tasks", "rowIdOrName": "i-1"})

        assert outcome.is_error
        assert outcome.text.startswith("Error: ")
        assert "docId" in outcome.text
        assert coda_api.requests == []

    def test_none_arguments_are_treated_as_empty(self, registry, coda_api):
        outcome = call(registry, "coda_whoami", None)

        assert not outcome.is_error
        assert coda_api.last.url.path == "/apis/v1/whoami"

    def test_out_of_range_limit(self, registry, coda_api):
        outcome = call(registry, "coda_list_docs", {"limit": 1000})

        assert outcome.is_error
        assert outcome.text.startswith("Error: limit:")
        assert coda_api.requests == []

    def test_wrong_type_is_rejected(self, registry, coda_api):
        outcome = call(registry, "coda_delete_rows", {"docId": "d", "tableIdOrName": "t", "rowIds": "i-1"})

        assert outcome.is_error
        assert "rowIds" in outcome.text
        assert coda_api.requests == []

    def test_doc_url_is_resolved_to_id(self, registry, coda_api):
        call(registry, "coda_get_doc", {"docId": "https://coda.io/d/Roadmap_dAbC123/Launch_su9"})

        assert coda_api.last.url.path == "/apis/v1/docs/AbC123"

    def test_doc_url_without_id_is_a_validation_error(self, registry, coda_api):
        outcome = call(registry, "coda_list_pages", {"docId": "https://coda.io/account"})

        assert outcome.is_error
        assert "Invalid docId" in outcome.text
        assert coda_api.requests == []

    def test_api_error_becomes_error_text(self, registry, coda_api):
        coda_api.respond("GET", "/docs/doc1/tables/Nope", status=404, json={"message": "Table not found"})

        outcome = call(registry, "coda_get_table", {"docId": "doc1", "tableIdOrName": "Nope"})

        assert outcome.is_error
        assert outcome.text == "Error: Table not found"

    def test_api_error_without_message_uses_status_line(self, registry, coda_api):
        coda_api.respond("GET", "/whoami", status=403, json={})

        outcome = call(registry, "coda_whoami")

        assert outcome.text == "Error: HTTP 403: Forbidden"

    def test_get_row_is_idempotent(self, registry, client, coda_api):
        coda_api.respond("GET", "/docs/doc1/tables/Tasks/rows/i-1", json={"id": "i-1", "values": {"c-1": "x"}})
        args = {"docId": "doc1", "tableIdOrName": "Tasks", "rowIdOrName": "i-1"}

        first = call(registry, "coda_get_row", args)
        second = call(registry, "coda_get_row", args)

        assert first == second
        assert len(coda_api.requests) == 2
        assert client.rate_limiter.usage(RequestClass.READ) == 2


class TestRowTools:

    def test_insert_rows_appends_async_note(self, registry, coda_api):
        coda_api.respond("POST", "/docs/doc1/tables/Tasks/rows", status=202, headers={"X-Request-Id": "req-1"})

        outcome = call(registry, "coda_insert_rows", {
            "docId": "doc1",
            "tableIdOrName": "Tasks",
            "rows": [{"cells": [{"column": "Name", "value": "Ship it"}]}],
        })

        assert not outcome.is_error
        assert outcome.text == json.dumps({"requestId": "req-1"}, indent=2) + "\n\n" + ASYNC_NOTE
        assert coda_api.last_json() == {"rows": [{"cells": [{"column": "Name", "value": "Ship it"}]}]}

    def test_upsert_rows_appends_multi_match_warning(self, registry, coda_api):
        coda_api.respond("POST", "/docs/doc1/tables/People/rows", status=202, headers={"X-Request-Id": "req-2"})

        outcome = call(registry, "coda_upsert_rows", {
            "docId": "doc1",
            "tableIdOrName": "People",
            "rows": [{"cells": [{"column": "Email", "value": "a@example.com"}]}],
            "keyColumns": ["Email"],
        })

        assert outcome.text.endswith("\n\n" + UPSERT_NOTE)
        assert "ALL will be updated" in outcome.text
        assert coda_api.last_json()["keyColumns"] == ["Email"]

    def test_upsert_with_empty_key_columns_is_rejected(self, registry, coda_api):
        outcome = call(registry, "coda_upsert_rows", {
            "docId": "doc1",
            "tableIdOrName": "People",
            "rows": [{"cells": [{"column": "Email", "value": "a@example.com"}]}],
            "keyColumns": [],
        })

        assert outcome.is_error
        assert "keyColumns" in outcome.text
        assert coda_api.requests == []

    def test_update_row(self, registry, coda_api):
        coda_api.respond("PUT", "/docs/doc1/tables/Tasks/rows/i-1", status=202, headers={"X-Request-Id": "req-3"})

        outcome = call(registry, "coda_update_row", {
            "docId": "doc1",
            "tableIdOrName": "Tasks",
            "rowIdOrName": "i-1",
            "cells": [{"column": "Done", "value": True}],
            "disableParsing": True,
        })

        assert outcome.text.endswith(ASYNC_NOTE)
        assert coda_api.last_json() == {
            "row": {"cells": [{"column": "Done", "value": True}]},
            "disableParsing": True,
        }

    def test_cell_value_is_required(self, registry, coda_api):
        outcome = call(registry, "coda_update_row", {
            "docId": "doc1",
            "tableIdOrName": "Tasks",
            "rowIdOrName": "i-1",
            "cells": [{"column": "Done"}],
        })

        assert outcome.is_error
        assert coda_api.requests == []

    def test_delete_rows(self, registry, coda_api):
        coda_api.respond("DELETE", "/docs/doc1/tables/Tasks/rows", status=202, headers={"X-Request-Id": "req-4"})

        outcome = call(registry, "coda_delete_rows", {
            "docId": "doc1", "tableIdOrName": "Tasks", "rowIds": ["i-1", "i-2"],
        })

        assert '"requestId": "req-4"' in outcome.text
        assert outcome.text.endswith(ASYNC_NOTE)

    def test_list_rows_defaults(self, registry, coda_api):
        call(registry, "coda_list_rows", {"docId": "doc1", "tableIdOrName": "Tasks"})

        params = coda_api.last.url.params
        assert params["limit"] == "25"
        assert "query" not in params

    def test_read_tools_have_no_note(self, registry, coda_api):
        coda_api.respond("GET", "/docs/doc1/tables/Tasks/rows", json={"items": []})

        outcome = call(registry, "coda_list_rows", {"docId": "doc1", "tableIdOrName": "Tasks"})

        assert outcome.text == json.dumps({"items": []}, indent=2)


class TestDeleteConfirmations:

    def test_delete_doc(self, registry, coda_api):
        coda_api.respond("DELETE", "/docs/doc1", status=202, json={})

        outcome = call(registry, "coda_delete_doc", {"docId": "doc1"})

        assert outcome == CallOutcome("Successfully deleted document doc1")

    def test_delete_page(self, registry):
        outcome = call(registry, "coda_delete_page", {"docId": "doc1", "pageIdOrName": "Launch"})

        assert outcome.text == "Successfully deleted page Launch"

    def test_delete_selected_page_content(self, registry, coda_api):
        outcome = call(registry, "coda_delete_page_content", {
            "docId": "doc1", "pageIdOrName": "Launch", "elementIds": ["cl-1", "cl-2"],
        })

        assert outcome.text == "Successfully deleted 2 element(s) from page Launch"
        assert coda_api.last_json() == {"elementIds": ["cl-1", "cl-2"]}

    def test_delete_all_page_content(self, registry, coda_api):
        outcome = call(registry, "coda_delete_page_content", {"docId": "doc1", "pageIdOrName": "Launch"})

        assert outcome.text == "Successfully deleted all content from page Launch"
        assert coda_api.last.content == b""


class TestPageTools:

    def test_create_page_with_markdown_content(self, registry, coda_api):
        call(registry, "coda_create_page", {
            "docId": "doc1",
            "name": "Notes",
            "parentPageIdOrName": "Home",
            "pageContent": {"type": "canvas", "canvasContent": {"format": "markdown", "content": "# Hi"}},
        })

        assert coda_api.last.method == "POST"
        assert coda_api.last_json() == {
            "name": "Notes",
            "parentPageIdOrName": "Home",
            "pageContent": {"type": "canvas", "canvasContent": {"format": "markdown", "content": "# Hi"}},
        }

    def test_update_page_content(self, registry, coda_api):
        call(registry, "coda_update_page", {
            "docId": "doc1",
            "pageIdOrName": "Notes",
            "contentUpdate": {
                "insertionMode": "append",
                "canvasContent": {"format": "html", "content": "<p>more</p>"},
            },
        })

        assert coda_api.last.method == "PUT"
        assert coda_api.last_json() == {
            "contentUpdate": {
                "insertionMode": "append",
                "canvasContent": {"format": "html", "content": "<p>more</p>"},
            },
        }

    def test_invalid_content_format(self, registry, coda_api):
        outcome = call(registry, "coda_create_page", {
            "docId": "doc1",
            "name": "Notes",
            "pageContent": {"canvasContent": {"format": "rtf", "content": "x"}},
        })

        assert outcome.is_error
        assert coda_api.requests == []


class TestRegistry:
    """ToolRegistry behaviour independent of the Coda tools."""

    class EchoInput(BaseModel):
        text: str

    def test_duplicate_names_are_rejected(self):
        tools = ToolGroup()

        @tools.tool("echo", self.EchoInput)
        async def echo(params):
            """Echo."""
            return {"text": params.text}

        @tools.tool("echo", self.EchoInput)
        async def echo_again(params):
            """Echo again."""
            return {"text": params.text}

        with pytest.raises(ValueError, match="Duplicate tool name: echo"):
            ToolRegistry(tools.handlers)

    def test_unexpected_exception_becomes_error_outcome(self):
        tools = ToolGroup()

        @tools.tool("explode", self.EchoInput)
        async def explode(params):
            """Always fails."""
            raise RuntimeError("boom")

        registry = ToolRegistry(tools.handlers)
        outcome = asyncio.run(registry.call_tool("explode", {"text": "x"}))

        assert outcome == CallOutcome("Error: boom", is_error=True)

    def test_docstring_is_default_description(self):
        tools = ToolGroup()

        @tools.tool("echo", self.EchoInput)
        async def echo(params):
            """
            Echo the text back.

            Longer explanation.
            """
            return {}

        assert tools.handlers[0].definition.description == "Echo the text back.\n\nLonger explanation."

    def test_render_replaces_json_payload(self):
        tools = ToolGroup()

        @tools.tool("echo", self.EchoInput, render=lambda params, result: f"said {params.text}")
        async def echo(params):
            """Echo."""
            return {"ignored": True}

        outcome = asyncio.run(ToolRegistry(tools.handlers).call_tool("echo", {"text": "hi"}))

        assert outcome.text == "said hi"
        assert not outcome.is_error


class TestStringArguments:
    """Names and titles are passed to Coda exactly as given."""

    def test_surrounding_spaces_are_preserved(self, registry, coda_api):
        call(registry, "coda_create_doc", {"title": "  Q3 Plan  "})

        assert coda_api.last_json() == {"title": "  Q3 Plan  "}

    def test_table_name_with_spaces_is_sent_verbatim(self, registry, coda_api):
        call(registry, "coda_get_table", {"docId": "doc1", "tableIdOrName": " Tasks "})

        assert coda_api.last.url.raw_path == b"/apis/v1/docs/doc1/tables/%20Tasks%20"

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_is_rejected(self, registry, coda_api, title):
        outcome = call(registry, "coda_create_doc", {"title": title})

        assert outcome.is_error
        assert outcome.text.startswith("Error: title:")
        assert coda_api.requests == []

"""Async HTTP client for the Coda REST API (v1).

Each public coroutine maps onto exactly one API endpoint. Requests pass
through the shared RateLimiter before they are sent, and every response is
classified into a payload (2xx) or a raised CodaAPIError (non-2xx).
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .config import DEFAULT_BASE_URL
from .exceptions import CodaAPIError, TransportError, error_from_response
from .rate_limiter import RateLimiter, RequestClass
from .timing import time_api_call

REQUEST_ID_HEADER = "X-Request-Id"


def _path(*segments: Any) -> str:
    """Join path segments, encoding each one (names may contain spaces or '/')."""
    return "/" + "/".join(quote(str(s), safe="") for s in segments)


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in data.items() if v is not None}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


class CodaClient:
    """
    Coda API client.

    Args:
        api_token: Coda API token, sent as a bearer token
        base_url: API root, defaults to https://coda.io/apis/v1
        timeout: Per-request timeout in seconds
        rate_limiter: Limiter to share between clients; one is created if omitted
        logger: Logger for request diagnostics
        transport: Optional httpx transport (tests pass an httpx.MockTransport)
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        rate_limiter: Optional[RateLimiter] = None,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._logger = logger or logging.getLogger(__name__)
        self.rate_limiter = rate_limiter or RateLimiter(logger=self._logger)
        self._http = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
            },
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CodaClient":
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, traceback: Any) -> None:
        await self.aclose()

    @time_api_call
    async def _request(self, method: str, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Send one request and classify the response.

        GET requests carry `data` as query parameters (None values skipped);
        any other method sends it as the JSON body.

        Returns:
            {} for 204, {"requestId": ...} for 202, otherwise the parsed body.

        Raises:
            CodaAPIError: (or a subclass) for any non-2xx response
            TransportError: if no response was received
        """
        await self.rate_limiter.acquire(RequestClass.for_method(method))

        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {}
        if method == "GET":
            if data:
                kwargs["params"] = {k: _query_value(v) for k, v in data.items() if v is not None}
        elif data is not None:
            kwargs["json"] = data

        self._logger.debug(f"{method} {path}")
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise TransportError(f"Network error: {str(e) or type(e).__name__}") from e

        if response.is_success:
            return self._parse_success(response)
        raise self._error_for(response)

    def _parse_success(self, response: httpx.Response) -> Dict[str, Any]:
        if response.status_code == 204:
            return {}

        if response.status_code == 202:
            # Accepted: the mutation is queued upstream, only its tracking ID is known.
            request_id = response.headers.get(REQUEST_ID_HEADER)
            if request_id is None:
                try:
                    request_id = response.json().get("requestId")
                except (ValueError, AttributeError):
                    request_id = None
            return {"requestId": request_id}

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise CodaAPIError(f"Invalid JSON in response: {e}", response.status_code, response) from e

    def _error_for(self, response: httpx.Response) -> CodaAPIError:
        message = f"HTTP {response.status_code}: {response.reason_phrase}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if body.get("message"):
                message = str(body["message"])
            elif body.get("error"):
                message = str(body["error"])

        self._logger.debug(f"Coda API returned {response.status_code}: {message}")
        return error_from_response(response.status_code, message, response)

    # =========================================================================
    # Account
    # =========================================================================

    async def whoami(self) -> Dict[str, Any]:
        """Return information about the token's user; useful to test the connection."""
        return await self._request("GET", "/whoami")

    # =========================================================================
    # Docs
    # =========================================================================

    async def list_docs(
        self,
        *,
        is_owner: Optional[bool] = None,
        query: Optional[str] = None,
        source_doc: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self._request("GET", "/docs", {
            "isOwner": is_owner,
            "query": query,
            "sourceDoc": source_doc,
            "limit": limit,
        })

    async def get_doc(self, doc_id: str) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id))

    async def create_doc(
        self,
        title: str,
        *,
        source_doc: Optional[str] = None,
        timezone: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request("POST", "/docs", _compact({
            "title": title,
            "sourceDoc": source_doc,
            "timezone": timezone,
            "folderId": folder_id,
        }))

    async def delete_doc(self, doc_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", _path("docs", doc_id))

    # =========================================================================
    # Pages
    # =========================================================================

    async def list_pages(self, doc_id: str, *, limit: Optional[int] = None) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "pages"), {"limit": limit})

    async def get_page(self, doc_id: str, page_id_or_name: str) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "pages", page_id_or_name))

    async def create_page(
        self,
        doc_id: str,
        name: str,
        *,
        subtitle: Optional[str] = None,
        icon_name: Optional[str] = None,
        image_url: Optional[str] = None,
        parent_page_id_or_name: Optional[str] = None,
        page_content: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Create a page, optionally as a subpage and with initial canvas content.

        page_content has the API shape:
            {"type": "canvas", "canvasContent": {"format": "markdown", "content": "..."}}
        """
        return await self._request("POST", _path("docs", doc_id, "pages"), _compact({
            "name": name,
            "subtitle": subtitle,
            "iconName": icon_name,
            "imageUrl": image_url,
            "parentPageIdOrName": parent_page_id_or_name,
            "pageContent": page_content,
        }))

    async def update_page(
        self,
        doc_id: str,
        page_id_or_name: str,
        *,
        name: Optional[str] = None,
        subtitle: Optional[str] = None,
        icon_name: Optional[str] = None,
        image_url: Optional[str] = None,
        is_hidden: Optional[bool] = None,
        content_update: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._request("PUT", _path("docs", doc_id, "pages", page_id_or_name), _compact({
            "name": name,
            "subtitle": subtitle,
            "iconName": icon_name,
            "imageUrl": image_url,
            "isHidden": is_hidden,
            "contentUpdate": content_update,
        }))

    async def delete_page(self, doc_id: str, page_id_or_name: str) -> Dict[str, Any]:
        return await self._request("DELETE", _path("docs", doc_id, "pages", page_id_or_name))

    async def get_page_content(
        self,
        doc_id: str,
        page_id_or_name: str,
        *,
        limit: Optional[int] = None,
        content_format: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "pages", page_id_or_name, "content"), {
            "limit": limit,
            "contentFormat": content_format,
        })

    async def delete_page_content(
        self,
        doc_id: str,
        page_id_or_name: str,
        element_ids: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Delete the given canvas elements, or all page content when element_ids is empty."""
        body = {"elementIds": element_ids} if element_ids else None
        return await self._request("DELETE", _path("docs", doc_id, "pages", page_id_or_name, "content"), body)

    # =========================================================================
    # Tables and columns
    # =========================================================================

    async def list_tables(
        self,
        doc_id: str,
        *,
        table_types: Optional[List[str]] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "tables"), {
            "tableTypes": table_types,
            "limit": limit,
        })

    async def get_table(self, doc_id: str, table_id_or_name: str) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "tables", table_id_or_name))

    async def create_table(self, doc_id: str, name: str, columns: List[Dict[str, Any]]) -> Dict[str, Any]:
        # Coda only partially supports table creation through the API.
        return await self._request("POST", _path("docs", doc_id, "tables"), {
            "name": name,
            "columns": columns,
        })

    async def list_columns(
        self,
        doc_id: str,
        table_id_or_name: str,
        *,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "tables", table_id_or_name, "columns"), {
            "limit": limit,
        })

    async def get_column(self, doc_id: str, table_id_or_name: str, column_id_or_name: str) -> Dict[str, Any]:
        return await self._request(
            "GET", _path("docs", doc_id, "tables", table_id_or_name, "columns", column_id_or_name)
        )

    # =========================================================================
    # Rows
    # =========================================================================

    async def list_rows(
        self,
        doc_id: str,
        table_id_or_name: str,
        *,
        query: Optional[str] = None,
        limit: Optional[int] = None,
        page_token: Optional[str] = None,
        use_column_names: Optional[bool] = None,
        value_format: Optional[str] = None,
        visible_only: Optional[bool] = None,
    ) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "tables", table_id_or_name, "rows"), {
            "query": query,
            "limit": limit,
            "pageToken": page_token,
            "useColumnNames": use_column_names,
            "valueFormat": value_format,
            "visibleOnly": visible_only,
        })

    async def get_row(
        self,
        doc_id: str,
        table_id_or_name: str,
        row_id_or_name: str,
        *,
        use_column_names: Optional[bool] = None,
        value_format: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._request("GET", _path("docs", doc_id, "tables", table_id_or_name, "rows", row_id_or_name), {
            "useColumnNames": use_column_names,
            "valueFormat": value_format,
        })

    async def insert_rows(
        self,
        doc_id: str,
        table_id_or_name: str,
        rows: List[Dict[str, Any]],
        *,
        disable_parsing: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Insert rows. Each row is {"cells": [{"column": ..., "value": ...}, ...]}.

        Processed asynchronously upstream; the result carries a requestId.
        """
        return await self._request("POST", _path("docs", doc_id, "tables", table_id_or_name, "rows"), _compact({
            "rows": rows,
            "disableParsing": disable_parsing,
        }))

    async def upsert_rows(
        self,
        doc_id: str,
        table_id_or_name: str,
        rows: List[Dict[str, Any]],
        key_columns: List[str],
        *,
        disable_parsing: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Insert rows, updating existing rows whose key_columns values match.

        Same endpoint as insert_rows; the API switches to upsert when
        keyColumns is present. Every matching row is updated.
        """
        if not key_columns:
            raise ValueError("upsert_rows requires at least one key column")
        return await self._request("POST", _path("docs", doc_id, "tables", table_id_or_name, "rows"), _compact({
            "rows": rows,
            "keyColumns": key_columns,
            "disableParsing": disable_parsing,
        }))

    async def update_row(
        self,
        doc_id: str,
        table_id_or_name: str,
        row_id_or_name: str,
        cells: List[Dict[str, Any]],
        *,
        disable_parsing: Optional[bool] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            _path("docs", doc_id, "tables", table_id_or_name, "rows", row_id_or_name),
            _compact({
                "row": {"cells": cells},
                "disableParsing": disable_parsing,
            }),
        )

    async def delete_row(self, doc_id: str, table_id_or_name: str, row_id_or_name: str) -> Dict[str, Any]:
        return await self._request(
            "DELETE", _path("docs", doc_id, "tables", table_id_or_name, "rows", row_id_or_name)
        )

    async def delete_rows(self, doc_id: str, table_id_or_name: str, row_ids: List[str]) -> Dict[str, Any]:
        return await self._request("DELETE", _path("docs", doc_id, "tables", table_id_or_name, "rows"), {
            "rowIds": row_ids,
        })

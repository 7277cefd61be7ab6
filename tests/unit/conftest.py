"""
Unit test fixtures.

Every unit test runs with an isolated config directory and without any
CODA_* environment variables, so a developer's real token or config file
never leaks into a test.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from coda_mcp.sdk.client import CodaClient
from coda_mcp.sdk.rate_limiter import RateLimiter

API_PREFIX = "/apis/v1"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    for var in ("CODA_API_TOKEN", "CODA_API_BASE_URL", "LOG_LEVEL", "CODA_MCP_CONFIG_FILE"):
        monkeypatch.delenv(var, raising=False)
    config_dir = tmp_path / "coda-mcp"
    monkeypatch.setenv("CODA_MCP_CONFIG_DIR", str(config_dir))
    return config_dir


class FakeClock:
    """Millisecond clock whose sleep() advances time instead of waiting."""

    def __init__(self, now: float = 0.0):
        self.now = now
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds * 1000


class FakeCodaAPI:
    """
    httpx.MockTransport handler that records requests and replays canned responses.

    Routes are keyed by (method, path) with the path relative to /apis/v1 and
    not percent-encoded. Unrouted requests get 200 with an empty JSON object.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Dict[str, Any]] = {}

    def respond(self, method: str, path: str, status: int = 200, json: Any = None,
                headers: Optional[Dict[str, str]] = None, content: Optional[bytes] = None,
                raises: Optional[Exception] = None):
        self._routes[(method, path)] = {
            "status": status, "json": json, "headers": headers, "content": content, "raises": raises,
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        route = self._routes.get((request.method, path))
        if route is None:
            return httpx.Response(200, json={})
        if route["raises"] is not None:
            raise route["raises"]
        if route["content"] is not None:
            return httpx.Response(route["status"], content=route["content"], headers=route["headers"])
        if route["json"] is None:
            return httpx.Response(route["status"], headers=route["headers"])
        return httpx.Response(route["status"], json=route["json"], headers=route["headers"])

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def coda_api():
    return FakeCodaAPI()


@pytest.fixture
def client(coda_api, fake_clock):
    limiter = RateLimiter(clock=fake_clock, sleep=fake_clock.sleep)
    return CodaClient("test-token", rate_limiter=limiter, transport=httpx.MockTransport(coda_api))

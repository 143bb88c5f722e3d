"""
crudsync test configuration.

Shared fixtures:
  - StubAdapter: answers every call with one canned outcome, records requests
  - widget_api: an httpx.MockTransport handler serving a small widget collection
  - widgets / merge_widgets: WIDGET action factories wired to that handler
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import pytest_asyncio

from crudsync import CrudActions, HttpxAdapter, ResourceSettings

BASE_URL = "https://api.test/widgets"

MOCK_LIST: list[dict[str, Any]] = [
    {"id": 1, "owner": 1, "text": "test 1"},
    {"id": 2, "owner": 2, "text": "test 2"},
    {"id": 3, "owner": 1, "text": "test 3"},
    {"id": 4, "owner": 1, "text": "test 4"},
    {"id": 5, "owner": 1, "text": "test 5"},
    {"id": 6, "owner": 1, "text": "test 6"},
]

UPDATED_THIRD = {"id": 3, "owner": 1, "text": "test 15"}

ERROR_MESSAGE = "Not Found"


# ---------------------------------------------------------------------------
# Stub adapter
# ---------------------------------------------------------------------------


class StubAdapter:
    """Records every request and reports the same outcome for each."""

    def __init__(self, data: Any = None, *, error: str | None = None, raw_data: Any = None) -> None:
        self.data = data
        self.error = error
        self.raw_data = raw_data
        self.requests = []

    async def __call__(self, request, on_success, on_failure) -> None:
        self.requests.append(request)
        if self.error is not None:
            on_failure(self.raw_data, self.error)
        else:
            on_success(self.data)


@pytest.fixture
def stub_adapter():
    """Factory: stub_adapter(data) or stub_adapter(error=..., raw_data=...)."""
    return StubAdapter


@pytest.fixture
def actions():
    """WIDGET factory whose adapter always succeeds with the full list."""
    return CrudActions(BASE_URL, "WIDGET", adapter=StubAdapter(MOCK_LIST))


# ---------------------------------------------------------------------------
# Mock HTTP API
# ---------------------------------------------------------------------------


_ROUTES: dict[tuple[str, str], Any] = {
    ("GET", "/widgets/1"): MOCK_LIST[1],
    ("POST", "/widgets"): MOCK_LIST[3],
    ("PUT", "/widgets/1"): MOCK_LIST[4],
    ("PUT", "/widgets/3"): UPDATED_THIRD,
    ("PATCH", "/widgets/1"): MOCK_LIST[5],
    ("DELETE", "/widgets/1"): {},
    ("DELETE", "/widgets/3"): {},
}


def widget_api(seen: list[httpx.Request]):
    """MockTransport handler; anything it does not know is a plain-text 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        path = request.url.path
        params = dict(request.url.params)

        if request.method == "GET" and path == "/widgets":
            if not params:
                return httpx.Response(200, json=MOCK_LIST)
            if params == {"owner": "1"}:
                return httpx.Response(200, json=[item for item in MOCK_LIST if item["owner"] == 1])
        elif (request.method, path) in _ROUTES:
            return httpx.Response(200, json=_ROUTES[(request.method, path)])

        return httpx.Response(404, text=ERROR_MESSAGE)

    return handler


@pytest.fixture
def api_requests() -> list[httpx.Request]:
    """Every request the mock API received, in order."""
    return []


@pytest_asyncio.fixture
async def http_client(api_requests):
    async with httpx.AsyncClient(transport=httpx.MockTransport(widget_api(api_requests))) as client:
        yield client


@pytest.fixture
def http_adapter(http_client) -> HttpxAdapter:
    return HttpxAdapter(http_client)


@pytest.fixture
def widgets(http_adapter) -> CrudActions:
    return CrudActions(BASE_URL, "WIDGET", adapter=http_adapter)


@pytest.fixture
def merge_widgets(http_adapter) -> CrudActions:
    return CrudActions(BASE_URL, "WIDGET", ResourceSettings(merge_on_write=True), adapter=http_adapter)

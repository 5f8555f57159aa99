"""Shared fixtures: an AhaClient backed by httpx.MockTransport."""
import json
from typing import Any, Union

import httpx
import pytest

from aha_mcp.client import AhaClient


class FakeAha:
    """Scripted Aha! backend.

    Queue responses (or exceptions) in the order the code under test will
    request them; every request received is kept in `requests`.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._responses: list[Union[httpx.Response, BaseException]] = []

    def reply(self, payload: Any, status_code: int = 200) -> "FakeAha":
        self._responses.append(httpx.Response(status_code, json=payload))
        return self

    def fail(self, status_code: int, text: str = "") -> "FakeAha":
        self._responses.append(httpx.Response(status_code, text=text))
        return self

    def raise_error(self, error: BaseException) -> "FakeAha":
        self._responses.append(error)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def body(self, index: int = 0) -> dict:
        """Decoded JSON body of the index-th request."""
        return json.loads(self.requests[index].content)


@pytest.fixture
def aha() -> FakeAha:
    return FakeAha()


@pytest.fixture
def client(aha: FakeAha) -> AhaClient:
    http = httpx.AsyncClient(
        base_url="https://test-domain.aha.io",
        transport=httpx.MockTransport(aha.handler),
        headers={"Authorization": "Bearer test-token"},
    )
    return AhaClient(http)

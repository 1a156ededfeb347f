from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.http_client import HttpxTransport
from core.services.dispatcher import ApiClient

BASE_URL = "https://api.example.com/1.1"


class Recorder:
    """Guarda los requests vistos por el MockTransport y responde con una cola fija."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, payload: Any = None, *, content: bytes | None = None) -> None:
        if content is None:
            content = json.dumps(payload if payload is not None else {}).encode("utf-8")
        self.responses.append(httpx.Response(status_code, content=content))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(200, content=b"{}")
        return self.responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def client(recorder: Recorder) -> ApiClient:
    http = httpx.Client(transport=httpx.MockTransport(recorder.handler))
    api = ApiClient(HttpxTransport(client=http), base_url=BASE_URL)
    yield api
    http.close()


@pytest.fixture
def failing_client() -> Callable[[Exception], ApiClient]:
    def _make(exc: Exception) -> ApiClient:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        http = httpx.Client(transport=httpx.MockTransport(handler))
        return ApiClient(HttpxTransport(client=http), base_url=BASE_URL)

    return _make

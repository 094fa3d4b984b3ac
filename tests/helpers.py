"""Recording mock transport and response builders shared by the tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

BASE_URL = "https://api.test"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def calls(self) -> int:
        return len(self.requests)


def envelope_response(status: int = 200, **body: Any) -> httpx.Response:
    return httpx.Response(status, json=body)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None

"""Pytest configuration for openwebui_client tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.response_factory: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def reply(
        self,
        status_code: int = 200,
        *,
        json_payload: Any = None,
        text: str | None = None,
        content_type: str | None = None,
    ) -> None:
        def factory(request: httpx.Request) -> httpx.Response:
            if text is not None:
                headers = {"content-type": content_type or "text/plain"}
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, json=json_payload)

        self.response_factory = factory

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.response_factory(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()

"""Tests for the client error taxonomy."""

from __future__ import annotations

import httpx
import pytest

from openwebui_client import classify_error
from openwebui_client.client import (
    ConfigurationError,
    ErrorKind,
    FormatError,
    HttpError,
    NotFoundError,
    OpenWebUIClientError,
    RequestTimeoutError,
    SerializationError,
    UnsupportedInputError,
)

_REQUEST = httpx.Request("GET", "http://localhost:3000/api/models")


@pytest.mark.parametrize(
    ("error", "kind", "retryable"),
    [
        (ConfigurationError("URL is required", field="base_url"), ErrorKind.CONFIGURATION, False),
        (RequestTimeoutError(5000), ErrorKind.TIMEOUT, True),
        (HttpError(500, "oops"), ErrorKind.HTTP, False),
        (NotFoundError(404, "missing"), ErrorKind.HTTP, False),
        (FormatError("/api/models"), ErrorKind.FORMAT, False),
        (UnsupportedInputError("nope"), ErrorKind.UNSUPPORTED_INPUT, False),
        (SerializationError("cycle"), ErrorKind.UNSUPPORTED_INPUT, False),
    ],
)
def test_client_errors_carry_kind(
    error: OpenWebUIClientError,
    kind: ErrorKind,
    retryable: bool,
) -> None:
    assert error.kind is kind
    assert error.retryable is retryable
    assert classify_error(error) is kind


def test_classify_error_recognises_pass_through_transport_errors() -> None:
    assert classify_error(httpx.ConnectError("refused", request=_REQUEST)) is ErrorKind.TRANSPORT
    assert classify_error(httpx.ReadTimeout("slow", request=_REQUEST)) is ErrorKind.TIMEOUT


def test_classify_error_ignores_unrelated_exceptions() -> None:
    assert classify_error(KeyError("x")) is None


def test_error_messages_carry_diagnostics() -> None:
    assert str(RequestTimeoutError(5000)) == "Request timeout after 5000ms"
    assert str(HttpError(401, "Unauthorized")) == "HTTP 401: Unauthorized"
    assert str(FormatError("/api/models", detail="bad")) == (
        "Unexpected response format from /api/models: bad"
    )


def test_error_kind_values_are_stable_strings() -> None:
    assert {kind.value for kind in ErrorKind} == {
        "configuration",
        "timeout",
        "http",
        "format",
        "transport",
        "unsupported_input",
    }

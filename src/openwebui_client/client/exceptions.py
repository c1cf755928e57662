"""Typed client-side exception hierarchy for Open WebUI HTTP calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import httpx


class ErrorKind(str, Enum):
    """Closed set of failure kinds a client call can surface."""

    CONFIGURATION = "configuration"
    TIMEOUT = "timeout"
    HTTP = "http"
    FORMAT = "format"
    TRANSPORT = "transport"
    UNSUPPORTED_INPUT = "unsupported_input"


@dataclass(frozen=True, slots=True)
class ErrorMetadata:
    """Structured metadata for branching on errors without parsing messages."""

    kind: ErrorKind
    retryable: bool


class OpenWebUIClientError(RuntimeError):
    """Base error for Open WebUI client operations."""

    metadata: ClassVar[ErrorMetadata]

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = message if detail is None else detail

    @property
    def kind(self) -> ErrorKind:
        return self.metadata.kind

    @property
    def retryable(self) -> bool:
        return self.metadata.retryable


class ConfigurationError(OpenWebUIClientError):
    """Client configuration is missing or invalid."""

    metadata = ErrorMetadata(kind=ErrorKind.CONFIGURATION, retryable=False)

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class RequestTimeoutError(OpenWebUIClientError):
    """The configured timeout elapsed before the call completed."""

    metadata = ErrorMetadata(kind=ErrorKind.TIMEOUT, retryable=True)

    def __init__(self, timeout_ms: int, *, path: str | None = None) -> None:
        super().__init__(f"Request timeout after {timeout_ms}ms")
        self.timeout_ms = timeout_ms
        self.path = path


class HttpError(OpenWebUIClientError):
    """The server answered with a non-success status code."""

    metadata = ErrorMetadata(kind=ErrorKind.HTTP, retryable=False)

    def __init__(self, status_code: int, body: str, *, path: str | None = None) -> None:
        super().__init__(f"HTTP {status_code}: {body}", detail=body)
        self.status_code = status_code
        self.body = body
        self.path = path


class InvalidRequestError(HttpError):
    """Server rejected the request payload or parameters."""


class PermissionDeniedError(HttpError):
    """Credential is missing, invalid, or lacks access."""


class NotFoundError(HttpError):
    """Requested resource or endpoint does not exist."""


class FormatError(OpenWebUIClientError):
    """A success response did not have the shape the endpoint expects."""

    metadata = ErrorMetadata(kind=ErrorKind.FORMAT, retryable=False)

    def __init__(self, endpoint: str, *, detail: str | None = None) -> None:
        message = f"Unexpected response format from {endpoint}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, detail=detail)
        self.endpoint = endpoint


class UnsupportedInputError(OpenWebUIClientError):
    """Caller supplied an input this client cannot send."""

    metadata = ErrorMetadata(kind=ErrorKind.UNSUPPORTED_INPUT, retryable=False)


class SerializationError(UnsupportedInputError):
    """Request body could not be encoded as JSON."""


def classify_error(exc: BaseException) -> ErrorKind | None:
    """Map any exception raised by a client call to its error kind.

    Transport failures are re-raised by the client unmodified, so they are
    recognised here by their httpx type. Returns ``None`` for exceptions that
    did not originate from a client call.
    """
    if isinstance(exc, OpenWebUIClientError):
        return exc.kind
    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.TRANSPORT
    return None

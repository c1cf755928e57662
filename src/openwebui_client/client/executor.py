"""Request construction, response decoding and error mapping shared by both clients."""

from __future__ import annotations

import io
import json
import logging
import mimetypes
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .config import ClientConfig
from .exceptions import (
    FormatError,
    HttpError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
    SerializationError,
    UnsupportedInputError,
)

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
DEFAULT_UPLOAD_FILENAME = "blob"
_DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class RequestSpec:
    """One outgoing call: method, path relative to the base URL, body and headers."""

    path: str
    method: str = "GET"
    body: Any = None
    headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedInputError(f"unsupported HTTP method: {self.method!r}")
        if not self.path.startswith("/"):
            raise UnsupportedInputError(f"request path must start with '/': {self.path!r}")
        object.__setattr__(self, "method", method)


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    """Status, content type and raw body of one response."""

    status_code: int
    content_type: str
    body: bytes
    encoding: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response, body: bytes) -> ResponseEnvelope:
        return cls(
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
            body=body,
            encoding=response.charset_encoding,
        )

    @property
    def text(self) -> str:
        return self.body.decode(self.encoding or "utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_json(self) -> bool:
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        return media_type == "application/json" or media_type.endswith("+json")


@dataclass(frozen=True, slots=True)
class PreparedCall:
    """Fully-built request arguments, ready to hand to an httpx client."""

    method: str
    path: str
    url: str
    headers: httpx.Headers
    content: bytes | None = None
    files: dict[str, tuple[str, Any, str]] | None = None

    def build(self, client: httpx.Client | httpx.AsyncClient) -> httpx.Request:
        return client.build_request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
            files=self.files,
        )


def prepare_call(config: ClientConfig, spec: RequestSpec) -> PreparedCall:
    """Build a JSON call; the body is encoded here, before any network I/O."""
    headers = merge_headers(
        {
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        },
        spec.headers,
    )
    content = None
    if spec.method != "GET" and spec.body is not None:
        content = serialize_body(spec.body)
    return PreparedCall(
        method=spec.method,
        path=spec.path,
        url=f"{config.base_url}{spec.path}",
        headers=headers,
        content=content,
    )


def prepare_upload(
    config: ClientConfig,
    path: str,
    file: Any,
    *,
    filename: str | None = None,
    content_type: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> PreparedCall:
    """Build a multipart call with a single ``file`` part.

    No Content-Type default is set so httpx can add the multipart boundary.
    """
    part = coerce_upload(file, filename=filename, content_type=content_type)
    merged = merge_headers(
        {
            "Authorization": f"Bearer {config.api_key}",
            "Accept": "application/json",
        },
        headers,
    )
    return PreparedCall(
        method="POST",
        path=path,
        url=f"{config.base_url}{path}",
        headers=merged,
        files={"file": part},
    )


def merge_headers(
    defaults: Mapping[str, str],
    overrides: Mapping[str, str] | None,
) -> httpx.Headers:
    """Merge caller headers over defaults key by key, case-insensitively."""
    headers = httpx.Headers(defaults)
    if overrides:
        headers.update(overrides)
    return headers


def serialize_body(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", exclude_none=True)
    try:
        text = json.dumps(body, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"request body is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


def coerce_upload(
    file: Any,
    *,
    filename: str | None = None,
    content_type: str | None = None,
) -> tuple[str, Any, str]:
    """Return the ``(filename, content, content_type)`` multipart tuple for ``file``."""
    if isinstance(file, (str, os.PathLike)):
        raise UnsupportedInputError(
            "File path upload is not supported. Pass bytes or an open binary file object.",
        )

    if isinstance(file, (bytes, bytearray, memoryview)):
        content: Any = bytes(file)
        name = filename or DEFAULT_UPLOAD_FILENAME
    elif isinstance(file, io.TextIOBase):
        raise UnsupportedInputError("Text-mode file objects cannot be uploaded; open in 'rb' mode.")
    elif callable(getattr(file, "read", None)):
        content = file
        raw_name = getattr(file, "name", None)
        guessed = os.path.basename(raw_name) if isinstance(raw_name, str) else ""
        name = filename or guessed or DEFAULT_UPLOAD_FILENAME
    else:
        raise UnsupportedInputError(f"unsupported upload input type: {type(file).__name__}")

    media_type = content_type or mimetypes.guess_type(name)[0] or _DEFAULT_UPLOAD_CONTENT_TYPE
    return name, content, media_type


def path_segment(value: str, *, name: str) -> str:
    """Percent-encode one identifier so it stays a single path segment."""
    if not isinstance(value, str) or not value:
        raise UnsupportedInputError(f"{name} must be a non-empty string")
    return quote(value, safe="")


def decode_envelope(envelope: ResponseEnvelope, *, path: str) -> Any:
    """Turn a response into a decoded value or raise the matching client error."""
    if not envelope.is_success:
        raise map_http_error(envelope.status_code, envelope.text, path=path)

    if not envelope.is_json:
        return envelope.text

    if not envelope.body.strip():
        return None
    try:
        return json.loads(envelope.text)
    except ValueError as exc:
        raise FormatError(path, detail="body is not valid JSON") from exc


def map_http_error(status_code: int, body: str, *, path: str) -> HttpError:
    if status_code in {400, 422}:
        return InvalidRequestError(status_code, body, path=path)
    if status_code in {401, 403}:
        return PermissionDeniedError(status_code, body, path=path)
    if status_code == 404:
        return NotFoundError(status_code, body, path=path)
    return HttpError(status_code, body, path=path)


def log_response(call: PreparedCall, envelope: ResponseEnvelope, elapsed_ms: float) -> None:
    logger.debug(
        "%s %s -> %d (%s, %d bytes) in %.1fms",
        call.method,
        call.url,
        envelope.status_code,
        envelope.content_type or "no content-type",
        len(envelope.body),
        elapsed_ms,
    )

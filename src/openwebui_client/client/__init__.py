"""Open WebUI HTTP client API: executor, error taxonomy and response normalizers."""

from .config import DEFAULT_TIMEOUT_MS, ClientConfig, build_config
from .exceptions import (
    ConfigurationError,
    ErrorKind,
    ErrorMetadata,
    FormatError,
    HttpError,
    InvalidRequestError,
    NotFoundError,
    OpenWebUIClientError,
    PermissionDeniedError,
    RequestTimeoutError,
    SerializationError,
    UnsupportedInputError,
    classify_error,
)
from .executor import RequestSpec, ResponseEnvelope
from .http import AsyncOpenWebUIClient, OpenWebUIClient
from .normalize import expect_mapping, unwrap_sequence, validate_response

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "AsyncOpenWebUIClient",
    "ClientConfig",
    "ConfigurationError",
    "ErrorKind",
    "ErrorMetadata",
    "FormatError",
    "HttpError",
    "InvalidRequestError",
    "NotFoundError",
    "OpenWebUIClient",
    "OpenWebUIClientError",
    "PermissionDeniedError",
    "RequestSpec",
    "RequestTimeoutError",
    "ResponseEnvelope",
    "SerializationError",
    "UnsupportedInputError",
    "build_config",
    "classify_error",
    "expect_mapping",
    "unwrap_sequence",
    "validate_response",
]

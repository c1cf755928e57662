"""openwebui_client package."""

from .client import (
    AsyncOpenWebUIClient,
    ClientConfig,
    ConfigurationError,
    ErrorKind,
    FormatError,
    HttpError,
    OpenWebUIClient,
    OpenWebUIClientError,
    RequestTimeoutError,
    UnsupportedInputError,
    classify_error,
)

__all__ = [
    "AsyncOpenWebUIClient",
    "ClientConfig",
    "ConfigurationError",
    "ErrorKind",
    "FormatError",
    "HttpError",
    "OpenWebUIClient",
    "OpenWebUIClientError",
    "RequestTimeoutError",
    "UnsupportedInputError",
    "__version__",
    "classify_error",
]
__version__ = "0.1.0"

"""Tests for client configuration validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from openwebui_client.client import (
    DEFAULT_TIMEOUT_MS,
    ClientConfig,
    ConfigurationError,
    ErrorKind,
    OpenWebUIClient,
    build_config,
)


@pytest.mark.parametrize(
    "url",
    ["http://localhost:3000", "https://owui.example.com/prefix", "http://10.0.0.2:8080"],
)
def test_trailing_slash_is_stripped_once(url: str) -> None:
    assert build_config(url, "key").base_url == url
    assert build_config(f"{url}/", "key").base_url == url


def test_only_one_trailing_slash_is_stripped() -> None:
    config = build_config("http://localhost:3000//", "key")

    assert config.base_url == "http://localhost:3000/"


def test_default_timeout_is_thirty_seconds() -> None:
    config = build_config("http://localhost:3000", "key")

    assert config.timeout_ms == DEFAULT_TIMEOUT_MS == 30000
    assert config.timeout_seconds == 30.0


def test_explicit_timeout_is_stored_verbatim() -> None:
    client = OpenWebUIClient("http://localhost:3000", "key", 60000)

    assert client.config.timeout_ms == 60000


@pytest.mark.parametrize(
    ("url", "api_key", "field", "message"),
    [
        ("", "key", "base_url", "URL is required"),
        (None, "key", "base_url", "URL is required"),
        ("http://localhost:3000", "", "api_key", "API key is required"),
        ("http://localhost:3000", None, "api_key", "API key is required"),
        ("/", "key", "base_url", "URL is required"),
    ],
)
def test_missing_url_or_key_fails_fast(
    url: str | None,
    api_key: str | None,
    field: str,
    message: str,
) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        OpenWebUIClient(url, api_key)  # type: ignore[arg-type]

    assert str(exc_info.value) == message
    assert exc_info.value.field == field
    assert exc_info.value.kind is ErrorKind.CONFIGURATION


def test_config_model_raises_configuration_error_directly() -> None:
    with pytest.raises(ConfigurationError, match="API key is required"):
        ClientConfig(base_url="http://localhost:3000", api_key="")


@pytest.mark.parametrize("timeout_ms", [0, -1])
def test_non_positive_timeout_is_rejected(timeout_ms: int) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        build_config("http://localhost:3000", "key", timeout_ms)

    assert exc_info.value.field == "timeout_ms"
    assert isinstance(exc_info.value.__cause__, ValidationError)


def test_config_is_immutable() -> None:
    config = build_config("http://localhost:3000", "key")

    with pytest.raises(ValidationError):
        config.api_key = "other"  # type: ignore[misc]


def test_config_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ClientConfig.model_validate({"base_url": "http://x", "api_key": "k", "retries": 3})

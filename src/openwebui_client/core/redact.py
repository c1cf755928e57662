"""Helpers for redacting credentials before request diagnostics are logged."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEY_TOKENS = (
    "token",
    "secret",
    "password",
    "authorization",
    "api_key",
    "apikey",
    "api-key",
    "cookie",
)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Redact credential-bearing header values, keeping the auth scheme."""
    redacted: dict[str, str] = {}
    for raw_key, value in headers.items():
        key = str(raw_key)
        if not _looks_sensitive_key(key):
            redacted[key] = value
            continue
        scheme, separator, _ = str(value).partition(" ")
        redacted[key] = f"{scheme} ***" if separator else "***"
    return redacted


def redact_mapping(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Redact sensitive values from nested config-like mappings."""
    redacted: dict[str, Any] = {}
    for raw_key, value in payload.items():
        key = str(raw_key)
        if _looks_sensitive_key(key):
            redacted[key] = "***"
            continue
        redacted[key] = _redact_value(value)
    return redacted


def _redact_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return redact_mapping(value)
    if isinstance(value, list):
        return [_redact_value(item) for item in value]
    return value


def _looks_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(token in lowered for token in _SENSITIVE_KEY_TOKENS)

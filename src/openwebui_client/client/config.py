"""Immutable connection settings for one Open WebUI client."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from .exceptions import ConfigurationError

DEFAULT_TIMEOUT_MS = 30000


class ClientConfig(BaseModel):
    """Base URL, bearer credential and timeout budget shared by every call.

    Missing values raise :class:`ConfigurationError` straight out of the
    validators, so no partially-configured instance can exist.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: StrictStr
    api_key: StrictStr
    timeout_ms: StrictInt = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        # Only one slash is removed; paths are appended as "base + path".
        stripped = value.removesuffix("/")
        if not stripped:
            raise ConfigurationError("URL is required", field="base_url")
        return stripped

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        if not value:
            raise ConfigurationError("API key is required", field="api_key")
        return value

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


def build_config(
    base_url: str | None,
    api_key: str | None,
    timeout_ms: int | None = None,
) -> ClientConfig:
    """Validate raw constructor arguments into a config or fail fast."""
    if not base_url:
        raise ConfigurationError("URL is required", field="base_url")
    if not api_key:
        raise ConfigurationError("API key is required", field="api_key")

    payload: dict[str, Any] = {"base_url": base_url, "api_key": api_key}
    if timeout_ms is not None:
        payload["timeout_ms"] = timeout_ms
    try:
        return ClientConfig.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()
        location = errors[0]["loc"] if errors else ()
        field = str(location[0]) if location else None
        if field == "timeout_ms":
            raise ConfigurationError(
                f"timeout must be a positive number of milliseconds, got {timeout_ms!r}",
                field=field,
            ) from exc
        raise ConfigurationError(f"invalid client config: {exc}", field=field) from exc

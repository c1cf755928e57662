"""Shape-tolerant decoders applied to successful endpoint payloads."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import FormatError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def unwrap_sequence(payload: Any, *, endpoint: str, field: str = "data") -> list[Any]:
    """Return the item list from a bare list or a ``{field: [...]}`` wrapper.

    Some endpoints answer with either shape for the same collection. Any other
    payload is a :class:`FormatError` naming ``endpoint``.
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict) and isinstance(payload.get(field), list):
        return payload[field]

    raise FormatError(endpoint)


def expect_mapping(payload: Any, *, endpoint: str) -> dict[str, Any]:
    """Return ``payload`` when it is a JSON object, else raise :class:`FormatError`."""
    if not isinstance(payload, dict):
        raise FormatError(endpoint, detail=f"expected JSON object, got {type(payload).__name__}")
    return payload


def validate_response(schema: type[SchemaT], payload: Any, *, endpoint: str) -> SchemaT:
    """Validate a decoded payload against ``schema``."""
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise FormatError(endpoint, detail=str(exc)) from exc

"""Tests for shape-tolerant response normalizers."""

from __future__ import annotations

from typing import Any

import pytest

from openwebui_client.client import FormatError, expect_mapping, unwrap_sequence, validate_response
from openwebui_client.core.schemas import Model, OllamaTagsResponse


def test_unwrap_sequence_returns_bare_list_unchanged() -> None:
    items = [{"id": "m1"}, {"id": "m2"}]

    assert unwrap_sequence(items, endpoint="/api/models") is items


def test_unwrap_sequence_reads_wrapped_field() -> None:
    items = [{"id": "m1"}]

    assert unwrap_sequence({"data": items, "object": "list"}, endpoint="/api/models") == items


def test_unwrap_sequence_supports_other_field_names() -> None:
    payload = {"models": [{"name": "gemma3:12b"}]}

    assert unwrap_sequence(payload, endpoint="/ollama/api/tags", field="models") == [
        {"name": "gemma3:12b"},
    ]


def test_unwrap_sequence_keeps_empty_collections() -> None:
    assert unwrap_sequence([], endpoint="/api/models") == []
    assert unwrap_sequence({"data": []}, endpoint="/api/models") == []


@pytest.mark.parametrize(
    "payload",
    [{"unexpected": "format"}, {"data": {"id": "m1"}}, {"data": None}, "text", None, 3],
)
def test_unwrap_sequence_rejects_other_shapes(payload: Any) -> None:
    with pytest.raises(FormatError) as exc_info:
        unwrap_sequence(payload, endpoint="/api/models")

    assert str(exc_info.value) == "Unexpected response format from /api/models"


def test_expect_mapping() -> None:
    assert expect_mapping({"id": "f"}, endpoint="/api/v1/files/") == {"id": "f"}
    with pytest.raises(FormatError, match="expected JSON object, got str"):
        expect_mapping("ok", endpoint="/api/v1/files/")


def test_validate_response_returns_schema_instance() -> None:
    tags = validate_response(
        OllamaTagsResponse,
        {
            "models": [
                {
                    "name": "llama2:7b",
                    "modified_at": "2024-01-02T00:00:00Z",
                    "size": 987654321,
                    "digest": "sha256:def456",
                }
            ]
        },
        endpoint="/ollama/api/tags",
    )

    assert tags.models[0].name == "llama2:7b"


def test_validate_response_wraps_validation_errors() -> None:
    with pytest.raises(FormatError) as exc_info:
        validate_response(Model, {"object": "model"}, endpoint="/api/models")

    assert exc_info.value.endpoint == "/api/models"
    assert "id" in (exc_info.value.detail or "")

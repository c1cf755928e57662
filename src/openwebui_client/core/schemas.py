"""Request and response schemas for the Open WebUI and proxied Ollama APIs."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue, StrictStr

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
MessageRole = Literal["system", "user", "assistant", "function", "tool"]


class OpenModel(BaseModel):
    """Base model that keeps unknown fields so payloads pass through unchanged."""

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """Dump the model to the JSON-ready mapping sent over the wire."""
        return self.model_dump(mode="json", exclude_none=True)


class FunctionCall(OpenModel):
    name: str
    arguments: str


class ChatMessage(OpenModel):
    """One chat turn."""

    role: MessageRole
    # Multimodal turns send a list of typed content parts.
    content: str | list[dict[str, JsonValue]]
    name: str | None = None
    function_call: FunctionCall | None = None


class FileReference(OpenModel):
    """Reference to an uploaded file or knowledge collection used for RAG."""

    type: Literal["file", "collection"] = "file"
    id: NonEmptyStr


class FunctionParameters(OpenModel):
    type: str
    properties: dict[str, JsonValue] | None = None
    required: list[str] | None = None


class FunctionDefinition(OpenModel):
    """Function or tool definition exposed by the server."""

    name: str
    description: str | None = None
    parameters: FunctionParameters | None = None


class ChatCompletionPayload(OpenModel):
    """Body of ``POST /api/chat/completions``."""

    model: NonEmptyStr
    messages: list[ChatMessage] = Field(min_length=1)
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: str | list[str] | None = None
    stream: bool | None = None
    functions: list[FunctionDefinition] | None = None
    function_call: Literal["none", "auto"] | dict[str, str] | None = None
    files: list[FileReference] | None = None


class ChatChoice(OpenModel):
    index: int
    message: ChatMessage
    finish_reason: str | None = None


class Usage(OpenModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatCompletionResponse(OpenModel):
    id: str
    object: str
    created: int
    model: str
    choices: list[ChatChoice]
    usage: Usage | None = None


class Model(OpenModel):
    """Entry returned by ``GET /api/models``."""

    id: str
    object: str | None = None
    created: int | None = None
    owned_by: str | None = None
    name: str | None = None


class Chat(OpenModel):
    """Stored conversation."""

    id: str
    title: str
    created_at: str | int | None = None
    updated_at: str | int | None = None
    messages: list[ChatMessage] | None = None
    metadata: dict[str, JsonValue] | None = None


class ConversationPayload(OpenModel):
    """Body of ``POST /api/chats``."""

    title: str | None = None
    messages: list[ChatMessage] | None = None
    metadata: dict[str, JsonValue] | None = None


class UpdateChatPayload(ConversationPayload):
    """Body of ``PATCH /api/chats/{id}``."""


class UserInfo(OpenModel):
    id: str
    username: str | None = None
    email: str | None = None
    name: str | None = None
    role: str | None = None
    created_at: str | int | None = None
    updated_at: str | int | None = None


class HealthStatus(OpenModel):
    status: str | bool
    version: str | None = None
    timestamp: str | None = None


class DeleteResponse(OpenModel):
    success: bool
    message: str | None = None


class UploadedFile(OpenModel):
    """Metadata returned after ``POST /api/v1/files/``."""

    id: str
    filename: str | None = None
    size: int | None = None
    content_type: str | None = None


class OllamaGeneratePayload(OpenModel):
    """Body of ``POST /ollama/api/generate``."""

    model: NonEmptyStr
    prompt: str
    system: str | None = None
    template: str | None = None
    context: list[int] | None = None
    stream: bool | None = None
    raw: bool | None = None
    format: str | dict[str, JsonValue] | None = None
    options: dict[str, JsonValue] | None = None
    keep_alive: str | int | None = None


class OllamaGenerateResponse(OpenModel):
    model: str
    created_at: str
    response: str
    done: bool
    context: list[int] | None = None
    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None
    eval_count: int | None = None


class OllamaEmbedPayload(OpenModel):
    """Body of ``POST /ollama/api/embed``."""

    model: NonEmptyStr
    input: str | list[str]
    truncate: bool | None = None
    options: dict[str, JsonValue] | None = None
    keep_alive: str | int | None = None


class OllamaEmbedResponse(OpenModel):
    embeddings: list[list[float]]
    model: str | None = None


class OllamaModelDetails(OpenModel):
    format: str | None = None
    family: str | None = None
    parameter_size: str | None = None
    quantization_level: str | None = None


class OllamaModel(OpenModel):
    name: str
    modified_at: str
    size: int
    digest: str
    details: OllamaModelDetails | None = None


class OllamaTagsResponse(OpenModel):
    models: list[OllamaModel]

"""Core schemas and helpers shared by the Open WebUI clients."""

from .redact import redact_headers, redact_mapping
from .schemas import (
    ChatCompletionPayload,
    ChatCompletionResponse,
    ChatMessage,
    ConversationPayload,
    FileReference,
    OllamaEmbedPayload,
    OllamaGeneratePayload,
    UpdateChatPayload,
)

__all__ = [
    "ChatCompletionPayload",
    "ChatCompletionResponse",
    "ChatMessage",
    "ConversationPayload",
    "FileReference",
    "OllamaEmbedPayload",
    "OllamaGeneratePayload",
    "UpdateChatPayload",
    "redact_headers",
    "redact_mapping",
]

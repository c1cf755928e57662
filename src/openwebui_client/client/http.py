"""HTTP clients for the Open WebUI REST API."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from openwebui_client.core.redact import redact_headers, redact_mapping
from openwebui_client.core.schemas import ChatCompletionResponse

from .config import DEFAULT_TIMEOUT_MS, ClientConfig, build_config
from .exceptions import RequestTimeoutError
from .executor import (
    PreparedCall,
    RequestSpec,
    ResponseEnvelope,
    decode_envelope,
    log_response,
    path_segment,
    prepare_call,
    prepare_upload,
)
from .normalize import expect_mapping, unwrap_sequence, validate_response

logger = logging.getLogger(__name__)

MODELS_PATH = "/api/models"
CHAT_COMPLETIONS_PATH = "/api/chat/completions"
CHATS_PATH = "/api/chats"
USER_INFO_PATH = "/api/users/me"
HEALTH_PATH = "/health"
FUNCTIONS_PATH = "/api/functions"
FILES_PATH = "/api/v1/files/"
KNOWLEDGE_PATH = "/api/v1/knowledge"
OLLAMA_GENERATE_PATH = "/ollama/api/generate"
OLLAMA_EMBED_PATH = "/ollama/api/embed"
OLLAMA_TAGS_PATH = "/ollama/api/tags"


def _chat_path(chat_id: str) -> str:
    return f"{CHATS_PATH}/{path_segment(chat_id, name='chat_id')}"


def _knowledge_add_path(knowledge_id: str) -> str:
    return f"{KNOWLEDGE_PATH}/{path_segment(knowledge_id, name='knowledge_id')}/file/add"


class OpenWebUIClient:
    """Synchronous client for Open WebUI endpoints.

    Every call opens its own short-lived ``httpx.Client``; the instance only
    holds its immutable :class:`ClientConfig` and the optional transport.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = build_config(base_url, api_key, timeout_ms)
        self._transport = transport
        logger.debug("configured client %s", redact_mapping(self._config.model_dump()))

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> OpenWebUIClient:
        return cls(config.base_url, config.api_key, config.timeout_ms, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def list_models(self) -> list[dict[str, Any]]:
        """List models, accepting both bare-list and ``{"data": [...]}`` replies."""
        payload = self.execute(RequestSpec(MODELS_PATH))
        return unwrap_sequence(payload, endpoint=MODELS_PATH)

    def create_chat_completion(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        """Create a chat completion; ``files`` entries enable RAG over uploads."""
        return self.execute(RequestSpec(CHAT_COMPLETIONS_PATH, method="POST", body=payload))

    def chat_completion_response(self, payload: Mapping[str, Any] | Any) -> ChatCompletionResponse:
        """Create a chat completion and validate the response schema."""
        response_payload = self.create_chat_completion(payload)
        return validate_response(
            ChatCompletionResponse,
            response_payload,
            endpoint=CHAT_COMPLETIONS_PATH,
        )

    def list_chats(self) -> list[dict[str, Any]]:
        return self.execute(RequestSpec(CHATS_PATH))

    def get_chat(self, chat_id: str) -> dict[str, Any]:
        return self.execute(RequestSpec(_chat_path(chat_id)))

    def create_conversation(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return self.execute(RequestSpec(CHATS_PATH, method="POST", body=payload))

    def update_chat(self, chat_id: str, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return self.execute(RequestSpec(_chat_path(chat_id), method="PATCH", body=payload))

    def delete_chat(self, chat_id: str) -> dict[str, Any]:
        return self.execute(RequestSpec(_chat_path(chat_id), method="DELETE"))

    def get_user_info(self) -> dict[str, Any]:
        return self.execute(RequestSpec(USER_INFO_PATH))

    def health(self) -> dict[str, Any]:
        return self.execute(RequestSpec(HEALTH_PATH))

    def list_functions(self) -> list[dict[str, Any]]:
        return self.execute(RequestSpec(FUNCTIONS_PATH))

    def upload_file(
        self,
        file: bytes | bytearray | memoryview | Any,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        """Upload raw bytes or an open binary file object for later RAG use.

        File system paths are rejected with ``UnsupportedInputError``; open the
        file and pass the handle instead.
        """
        call = prepare_upload(
            self._config,
            FILES_PATH,
            file,
            filename=filename,
            content_type=content_type,
        )
        return expect_mapping(self._send(call), endpoint=FILES_PATH)

    def add_file_to_knowledge(self, knowledge_id: str, file_id: str) -> dict[str, Any]:
        return self.execute(
            RequestSpec(
                _knowledge_add_path(knowledge_id),
                method="POST",
                body={"file_id": file_id},
            ),
        )

    def ollama_generate(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return self.execute(RequestSpec(OLLAMA_GENERATE_PATH, method="POST", body=payload))

    def ollama_embed(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return self.execute(RequestSpec(OLLAMA_EMBED_PATH, method="POST", body=payload))

    def ollama_list_models(self) -> dict[str, Any]:
        return self.execute(RequestSpec(OLLAMA_TAGS_PATH))

    def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Call any endpoint; the decoded body is returned without normalization."""
        return self.execute(RequestSpec(path, method=method, body=body, headers=headers))

    def execute(self, spec: RequestSpec) -> Any:
        return self._send(prepare_call(self._config, spec))

    def _send(self, call: PreparedCall) -> Any:
        timeout_ms = self._config.timeout_ms
        started = time.monotonic()
        deadline = started + self._config.timeout_seconds
        logger.debug("%s %s headers=%s", call.method, call.url, redact_headers(call.headers))
        try:
            with httpx.Client(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.send(call.build(client), stream=True)
                try:
                    body = _read_before_deadline(response, deadline, timeout_ms, call.path)
                finally:
                    response.close()
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(timeout_ms, path=call.path) from exc

        envelope = ResponseEnvelope.from_response(response, body)
        log_response(call, envelope, (time.monotonic() - started) * 1000.0)
        return decode_envelope(envelope, path=call.path)


class AsyncOpenWebUIClient:
    """Async variant of :class:`OpenWebUIClient` for event-loop callers."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = build_config(base_url, api_key, timeout_ms)
        self._transport = transport
        logger.debug("configured async client %s", redact_mapping(self._config.model_dump()))

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncOpenWebUIClient:
        return cls(config.base_url, config.api_key, config.timeout_ms, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def list_models(self) -> list[dict[str, Any]]:
        payload = await self.execute(RequestSpec(MODELS_PATH))
        return unwrap_sequence(payload, endpoint=MODELS_PATH)

    async def create_chat_completion(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return await self.execute(RequestSpec(CHAT_COMPLETIONS_PATH, method="POST", body=payload))

    async def chat_completion_response(
        self,
        payload: Mapping[str, Any] | Any,
    ) -> ChatCompletionResponse:
        response_payload = await self.create_chat_completion(payload)
        return validate_response(
            ChatCompletionResponse,
            response_payload,
            endpoint=CHAT_COMPLETIONS_PATH,
        )

    async def list_chats(self) -> list[dict[str, Any]]:
        return await self.execute(RequestSpec(CHATS_PATH))

    async def get_chat(self, chat_id: str) -> dict[str, Any]:
        return await self.execute(RequestSpec(_chat_path(chat_id)))

    async def create_conversation(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return await self.execute(RequestSpec(CHATS_PATH, method="POST", body=payload))

    async def update_chat(self, chat_id: str, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return await self.execute(RequestSpec(_chat_path(chat_id), method="PATCH", body=payload))

    async def delete_chat(self, chat_id: str) -> dict[str, Any]:
        return await self.execute(RequestSpec(_chat_path(chat_id), method="DELETE"))

    async def get_user_info(self) -> dict[str, Any]:
        return await self.execute(RequestSpec(USER_INFO_PATH))

    async def health(self) -> dict[str, Any]:
        return await self.execute(RequestSpec(HEALTH_PATH))

    async def list_functions(self) -> list[dict[str, Any]]:
        return await self.execute(RequestSpec(FUNCTIONS_PATH))

    async def upload_file(
        self,
        file: bytes | bytearray | memoryview | Any,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        call = prepare_upload(
            self._config,
            FILES_PATH,
            file,
            filename=filename,
            content_type=content_type,
        )
        return expect_mapping(await self._send(call), endpoint=FILES_PATH)

    async def add_file_to_knowledge(self, knowledge_id: str, file_id: str) -> dict[str, Any]:
        return await self.execute(
            RequestSpec(
                _knowledge_add_path(knowledge_id),
                method="POST",
                body={"file_id": file_id},
            ),
        )

    async def ollama_generate(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return await self.execute(RequestSpec(OLLAMA_GENERATE_PATH, method="POST", body=payload))

    async def ollama_embed(self, payload: Mapping[str, Any] | Any) -> dict[str, Any]:
        return await self.execute(RequestSpec(OLLAMA_EMBED_PATH, method="POST", body=payload))

    async def ollama_list_models(self) -> dict[str, Any]:
        return await self.execute(RequestSpec(OLLAMA_TAGS_PATH))

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.execute(RequestSpec(path, method=method, body=body, headers=headers))

    async def execute(self, spec: RequestSpec) -> Any:
        return await self._send(prepare_call(self._config, spec))

    async def _send(self, call: PreparedCall) -> Any:
        timeout_ms = self._config.timeout_ms
        started = time.monotonic()
        logger.debug("%s %s headers=%s", call.method, call.url, redact_headers(call.headers))
        try:
            response, body = await asyncio.wait_for(
                self._exchange(call),
                timeout=self._config.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise RequestTimeoutError(timeout_ms, path=call.path) from exc

        envelope = ResponseEnvelope.from_response(response, body)
        log_response(call, envelope, (time.monotonic() - started) * 1000.0)
        return decode_envelope(envelope, path=call.path)

    async def _exchange(self, call: PreparedCall) -> tuple[httpx.Response, bytes]:
        async with httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.send(call.build(client), stream=True)
            try:
                body = await response.aread()
            finally:
                await response.aclose()
        return response, body


def _read_before_deadline(
    response: httpx.Response,
    deadline: float,
    timeout_ms: int,
    path: str,
) -> bytes:
    """Read the full body, failing once the wall-clock budget is spent."""
    chunks: list[bytes] = []
    if time.monotonic() > deadline:
        raise RequestTimeoutError(timeout_ms, path=path)
    for chunk in response.iter_bytes():
        chunks.append(chunk)
        if time.monotonic() > deadline:
            raise RequestTimeoutError(timeout_ms, path=path)
    return b"".join(chunks)

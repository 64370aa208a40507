"""DeepSeek adapter over its OpenAI-style REST API."""

import logging
from typing import Any

import httpx

from anychat.capabilities import AIClient, Capability, require_messages
from anychat.config import PROVIDER_DEFAULTS
from anychat.exceptions import ProviderAPIError
from anychat.types import (
    AIProvider,
    ChatMessage,
    ChatResponse,
    EmbeddingOptions,
    EmbeddingResponse,
)


logger = logging.getLogger(__name__)

_DEFAULTS = PROVIDER_DEFAULTS[AIProvider.DEEPSEEK]


class DeepSeekProvider(AIClient):
    """Client for the DeepSeek REST API"""

    provider = AIProvider.DEEPSEEK
    capabilities = frozenset({Capability.EMBEDDINGS})

    def __init__(
        self,
        api_key: str,
        model: str = _DEFAULTS.chat_model,
        base_url: str = _DEFAULTS.base_url,
        *,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, model)
        self.base_url = base_url.rstrip("/")
        self.http_client = http_client or httpx.AsyncClient()

    async def close(self) -> None:
        await self.http_client.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"POST {self.base_url}{path} model={payload.get('model')}")
        try:
            response = await self.http_client.post(
                f"{self.base_url}{path}",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self._api_key}",
                },
                json=payload,
            )
        except Exception as e:
            logger.error(f"Error calling DeepSeek {path}: {e}")
            raise

        if not response.is_success:
            error = ProviderAPIError(
                self.display_name, response.reason_phrase, response.status_code
            )
            logger.error(f"Error calling DeepSeek {path}: {error}")
            raise error
        return response.json()

    async def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        require_messages(messages)
        data = await self._post(
            "/chat/completions",
            {
                "model": self.model,
                "messages": [{"role": m.role, "content": m.content} for m in messages],
            },
        )

        content = ""
        choices = data.get("choices") or []
        if choices:
            message = choices[0].get("message") or {}
            if isinstance(message.get("content"), str):
                content = message["content"]

        return ChatResponse(content=content, provider=self.provider, model=self.model)

    async def create_embeddings(self, options: EmbeddingOptions) -> EmbeddingResponse:
        model = options.model or _DEFAULTS.embedding_model
        data = await self._post(
            "/embeddings",
            {"model": model, "input": options.inputs},
        )
        return EmbeddingResponse(
            embeddings=[item["embedding"] for item in data["data"]],
            provider=self.provider,
            model=model,
        )

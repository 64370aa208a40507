"""Anthropic Claude adapter: chat through the SDK, embeddings over raw HTTP."""

import logging
from typing import Any

import anthropic
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

_DEFAULTS = PROVIDER_DEFAULTS[AIProvider.CLAUDE]


class ClaudeProvider(AIClient):
    """
    Wrapper for the Anthropic client.

    The Anthropic SDK has no embeddings endpoint, so embeddings are requested
    with a direct HTTP call. That endpoint takes a single input: when given
    several texts only the first is embedded.
    """

    provider = AIProvider.CLAUDE
    capabilities = frozenset({Capability.EMBEDDINGS})

    def __init__(
        self,
        api_key: str,
        model: str = _DEFAULTS.chat_model,
        *,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, model)
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.http_client = http_client or httpx.AsyncClient()

    async def close(self) -> None:
        await self.client.close()
        await self.http_client.aclose()

    async def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        """Create a chat completion using the Anthropic API"""
        require_messages(messages)

        # Claude takes the system prompt as a separate field
        system = next((m.content for m in messages if m.role == "system"), None)
        params: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": m.role, "content": m.content}
                for m in messages
                if m.role in ("user", "assistant")
            ],
            "max_tokens": _DEFAULTS.max_tokens,
        }
        if system is not None:
            params["system"] = system

        try:
            response = await self.client.messages.create(**params)
        except Exception as e:
            logger.error(f"Error creating chat completion with Anthropic: {e}")
            raise

        # Safely extract content
        content = ""
        if (
            hasattr(response, "content")
            and response.content
            and getattr(response.content[0], "type", None) == "text"
        ):
            content = response.content[0].text or ""

        return ChatResponse(content=content, provider=self.provider, model=self.model)

    async def create_embeddings(self, options: EmbeddingOptions) -> EmbeddingResponse:
        inputs = options.inputs
        model = options.model or _DEFAULTS.embedding_model
        if len(inputs) > 1:
            logger.warning(
                f"Claude embeddings accept a single input; "
                f"ignoring {len(inputs) - 1} additional input(s)"
            )

        try:
            response = await self.http_client.post(
                f"{_DEFAULTS.base_url}/embeddings",
                headers={
                    "Content-Type": "application/json",
                    "x-api-key": self._api_key,
                    "anthropic-version": _DEFAULTS.api_version,
                },
                json={"model": model, "input": inputs[0]},
            )
        except Exception as e:
            logger.error(f"Error creating embedding with Claude: {e}")
            raise

        if not response.is_success:
            error = ProviderAPIError(
                self.display_name, response.reason_phrase, response.status_code
            )
            logger.error(f"Error creating embedding with Claude: {error}")
            raise error

        data = response.json()
        return EmbeddingResponse(
            embeddings=[data["embedding"]],
            provider=self.provider,
            model=model,
        )

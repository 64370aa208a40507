"""Google Gemini adapter."""

import logging

from google import genai
from google.genai import types as genai_types

from anychat.capabilities import AIClient, Capability, require_messages
from anychat.config import PROVIDER_DEFAULTS
from anychat.types import (
    AIProvider,
    ChatMessage,
    ChatResponse,
    EmbeddingOptions,
    EmbeddingResponse,
)


logger = logging.getLogger(__name__)

_DEFAULTS = PROVIDER_DEFAULTS[AIProvider.GEMINI]


class GeminiProvider(AIClient):
    """
    Wrapper for the Google Gen AI client.

    Chat sessions only accept the newest turn, so earlier user turns are
    replayed into a fresh session one at a time, in order, before the final
    message is sent. Assistant turns are not replayed; the session records
    the model's own replies as it goes.
    """

    provider = AIProvider.GEMINI
    capabilities = frozenset({Capability.EMBEDDINGS})
    pending_capabilities = frozenset({Capability.IMAGE_GENERATION})

    def __init__(self, api_key: str, model: str = _DEFAULTS.chat_model):
        super().__init__(api_key, model)
        self.client = genai.Client(api_key=api_key)

    async def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        require_messages(messages)

        config = None
        system = next((m.content for m in messages if m.role == "system"), None)
        if system is not None:
            config = genai_types.GenerateContentConfig(system_instruction=system)

        # The system prompt travels only as system_instruction
        turns = [m for m in messages if m.role != "system"]
        require_messages(turns)
        *history, last = turns

        try:
            session = self.client.aio.chats.create(model=self.model, config=config)

            # Must stay sequential: the session only accumulates history in call order
            for message in history:
                if message.role == "user":
                    await session.send_message(message.content)

            response = await session.send_message(last.content)
        except Exception as e:
            logger.error(f"Error creating chat completion with Gemini: {e}")
            raise

        return ChatResponse(
            content=response.text or "",
            provider=self.provider,
            model=self.model,
        )

    async def create_embeddings(self, options: EmbeddingOptions) -> EmbeddingResponse:
        inputs = options.inputs
        model = options.model or _DEFAULTS.embedding_model
        if len(inputs) > 1:
            logger.warning(
                f"Gemini embeddings are requested for the first input only; "
                f"ignoring {len(inputs) - 1} additional input(s)"
            )

        try:
            result = await self.client.aio.models.embed_content(
                model=model,
                contents=inputs[0],
            )
        except Exception as e:
            logger.error(f"Error creating embedding with Gemini: {e}")
            raise
        embedding = result.embeddings[0] if result.embeddings else None

        return EmbeddingResponse(
            embeddings=[list(embedding.values or []) if embedding else []],
            provider=self.provider,
            model=model,
        )

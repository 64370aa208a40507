"""OpenAI adapter: chat, embeddings, image generation and the Assistants API."""

import logging
from typing import Any

from openai import AsyncOpenAI

from anychat.capabilities import AIClient, Capability, require_messages
from anychat.config import OPENAI_IMAGE_DEFAULTS, PROVIDER_DEFAULTS
from anychat.types import (
    AIProvider,
    Assistant,
    AssistantResponse,
    ChatMessage,
    ChatResponse,
    EmbeddingOptions,
    EmbeddingResponse,
    ImageGenerationOptions,
    ImageGenerationResponse,
    RunStatus,
    Thread,
)


logger = logging.getLogger(__name__)

_DEFAULTS = PROVIDER_DEFAULTS[AIProvider.OPENAI]

# Any run status not listed here (queued, requires_action, cancelling,
# cancelled, expired, incomplete, ...) reports as in_progress.
_RUN_STATUSES: dict[str, RunStatus] = {
    "completed": "completed",
    "failed": "failed",
}


def map_run_status(status: str | None) -> RunStatus:
    """Map an OpenAI run status onto the three canonical statuses."""
    return _RUN_STATUSES.get(status or "", "in_progress")


def message_text(message: Any) -> str:
    """Text of the first content block of a thread message, if it is text."""
    content = getattr(message, "content", None)
    if not content:
        return ""
    block = content[0]
    if getattr(block, "type", None) != "text":
        return ""
    return block.text.value or ""


def _to_assistant(assistant: Any) -> Assistant:
    return Assistant(
        id=assistant.id,
        name=assistant.name or "",
        description=assistant.description or None,
        model=assistant.model,
        instructions=assistant.instructions or None,
    )


class OpenAIProvider(AIClient):
    """Wrapper for the OpenAI client"""

    provider = AIProvider.OPENAI
    capabilities = frozenset(
        {Capability.EMBEDDINGS, Capability.IMAGE_GENERATION, Capability.ASSISTANTS}
    )

    def __init__(self, api_key: str, model: str = _DEFAULTS.chat_model):
        super().__init__(api_key, model)
        self.client = AsyncOpenAI(api_key=api_key)

    async def close(self) -> None:
        await self.client.close()

    async def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        """Create a chat completion using the OpenAI API"""
        require_messages(messages)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": m.role, "content": m.content} for m in messages],
            )
        except Exception as e:
            logger.error(f"Error creating chat completion with OpenAI: {e}")
            raise

        content = ""
        if response is not None and response.choices:
            message = response.choices[0].message
            if message is not None and isinstance(message.content, str):
                content = message.content

        return ChatResponse(content=content, provider=self.provider, model=self.model)

    async def generate_image(
        self, options: ImageGenerationOptions
    ) -> ImageGenerationResponse:
        try:
            response = await self.client.images.generate(
                prompt=options.prompt,
                n=options.n or OPENAI_IMAGE_DEFAULTS.n,
                size=options.size or OPENAI_IMAGE_DEFAULTS.size,
                quality=options.quality or OPENAI_IMAGE_DEFAULTS.quality,
                style=options.style or OPENAI_IMAGE_DEFAULTS.style,
            )
        except Exception as e:
            logger.error(f"Error generating image with OpenAI: {e}")
            raise

        return ImageGenerationResponse(
            urls=[image.url or "" for image in response.data or []],
            provider=self.provider,
        )

    async def create_embeddings(self, options: EmbeddingOptions) -> EmbeddingResponse:
        """Create embeddings for one text or a list of texts, in input order"""
        model = options.model or _DEFAULTS.embedding_model
        try:
            response = await self.client.embeddings.create(
                input=options.input,
                model=model,
            )
        except Exception as e:
            logger.error(f"Error creating embedding: {e}")
            raise

        return EmbeddingResponse(
            embeddings=[item.embedding for item in response.data],
            provider=self.provider,
            model=model,
        )

    # Assistants API

    async def create_assistant(
        self,
        name: str,
        *,
        model: str | None = None,
        description: str | None = None,
        instructions: str | None = None,
    ) -> Assistant:
        params: dict[str, Any] = {"name": name, "model": model or self.model}
        if description is not None:
            params["description"] = description
        if instructions is not None:
            params["instructions"] = instructions

        try:
            assistant = await self.client.beta.assistants.create(**params)
        except Exception as e:
            logger.error(f"Error creating assistant {name!r}: {e}")
            raise
        return _to_assistant(assistant)

    async def list_assistants(self) -> list[Assistant]:
        try:
            response = await self.client.beta.assistants.list()
        except Exception as e:
            logger.error(f"Error listing assistants: {e}")
            raise
        return [_to_assistant(assistant) for assistant in response.data]

    async def delete_assistant(self, assistant_id: str) -> bool:
        try:
            response = await self.client.beta.assistants.delete(assistant_id)
        except Exception as e:
            logger.error(f"Error deleting assistant {assistant_id}: {e}")
            raise
        return response.deleted

    async def create_thread(self) -> Thread:
        try:
            thread = await self.client.beta.threads.create()
        except Exception as e:
            logger.error(f"Error creating thread: {e}")
            raise
        return Thread(id=thread.id, messages=[])

    async def get_thread(self, thread_id: str) -> Thread:
        try:
            response = await self.client.beta.threads.messages.list(thread_id)
        except Exception as e:
            logger.error(f"Error listing messages of thread {thread_id}: {e}")
            raise
        return Thread(
            id=thread_id,
            messages=[
                ChatMessage(role=message.role, content=message_text(message))
                for message in response.data
            ],
        )

    async def add_message(self, thread_id: str, message: ChatMessage) -> None:
        try:
            await self.client.beta.threads.messages.create(
                thread_id,
                role=message.role,
                content=message.content,
            )
        except Exception as e:
            logger.error(f"Error adding message to thread {thread_id}: {e}")
            raise

    async def run_assistant(self, assistant_id: str, thread_id: str) -> AssistantResponse:
        try:
            run = await self.client.beta.threads.runs.create(
                thread_id,
                assistant_id=assistant_id,
            )
        except Exception as e:
            logger.error(f"Error running assistant {assistant_id} on {thread_id}: {e}")
            raise

        logger.debug(f"Started run {run.id} on thread {thread_id}: {run.status}")
        return AssistantResponse(
            message_id=run.id,
            thread_id=thread_id,
            content="",
            status=map_run_status(run.status),
        )

    async def get_assistant_response(
        self, thread_id: str, run_id: str
    ) -> AssistantResponse:
        """
        Poll a run and report the newest message on its thread.

        Args:
            thread_id: Thread the run executes against
            run_id: Run returned by run_assistant() as ``message_id``

        Returns:
            AssistantResponse for the newest thread message. While a run has
            produced nothing yet the thread may be empty, in which case the
            message id and content are empty strings.
        """
        try:
            run = await self.client.beta.threads.runs.retrieve(
                run_id, thread_id=thread_id
            )
            messages = await self.client.beta.threads.messages.list(thread_id)
        except Exception as e:
            logger.error(f"Error polling run {run_id} on thread {thread_id}: {e}")
            raise

        latest = messages.data[0] if messages.data else None
        return AssistantResponse(
            message_id=latest.id if latest is not None else "",
            thread_id=thread_id,
            content=message_text(latest) if latest is not None else "",
            status=map_run_status(run.status),
        )

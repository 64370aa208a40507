"""
The contract every provider adapter is checked against.

``chat`` is mandatory. Every other operation belongs to an optional
capability group: a provider either declares the capability in
``capabilities`` and overrides the operations, or inherits the default
operations, which raise ``UnsupportedCapabilityError`` without touching the
network.
"""

from __future__ import annotations

import abc
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn

from anychat.config import PROVIDER_DEFAULTS
from anychat.exceptions import UnsupportedCapabilityError


if TYPE_CHECKING:
    from typing import Self

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
        Thread,
    )


class Capability(str, Enum):
    """Optional operation groups. The value is the label used in error messages."""

    EMBEDDINGS = "Embeddings"
    IMAGE_GENERATION = "Image generation"
    ASSISTANTS = "Assistants API"


class AIClient(abc.ABC):
    """Base class for provider adapters."""

    provider: ClassVar[AIProvider]
    capabilities: ClassVar[frozenset[Capability]] = frozenset()
    # Unsupported capabilities the provider is expected to gain later
    pending_capabilities: ClassVar[frozenset[Capability]] = frozenset()

    def __init__(self, api_key: str, model: str):
        self._api_key = api_key
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    @property
    def display_name(self) -> str:
        return PROVIDER_DEFAULTS[self.provider].display_name

    @classmethod
    def supports(cls, capability: Capability) -> bool:
        """Check whether this provider implements an optional capability."""
        return capability in cls.capabilities

    def _unsupported(self, capability: Capability) -> NoReturn:
        raise UnsupportedCapabilityError(
            capability.value,
            self.display_name,
            pending=capability in self.pending_capabilities,
        )

    async def close(self) -> None:
        """Release the underlying transport, if the adapter holds one."""
        return None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @abc.abstractmethod
    async def chat(self, messages: list[ChatMessage]) -> ChatResponse:
        """Send a conversation and return the provider's best reply."""

    async def create_embeddings(self, options: EmbeddingOptions) -> EmbeddingResponse:
        self._unsupported(Capability.EMBEDDINGS)

    async def generate_image(
        self, options: ImageGenerationOptions
    ) -> ImageGenerationResponse:
        self._unsupported(Capability.IMAGE_GENERATION)

    async def create_assistant(
        self,
        name: str,
        *,
        model: str | None = None,
        description: str | None = None,
        instructions: str | None = None,
    ) -> Assistant:
        self._unsupported(Capability.ASSISTANTS)

    async def list_assistants(self) -> list[Assistant]:
        self._unsupported(Capability.ASSISTANTS)

    async def delete_assistant(self, assistant_id: str) -> bool:
        self._unsupported(Capability.ASSISTANTS)

    async def create_thread(self) -> Thread:
        self._unsupported(Capability.ASSISTANTS)

    async def get_thread(self, thread_id: str) -> Thread:
        self._unsupported(Capability.ASSISTANTS)

    async def add_message(self, thread_id: str, message: ChatMessage) -> None:
        self._unsupported(Capability.ASSISTANTS)

    async def run_assistant(self, assistant_id: str, thread_id: str) -> AssistantResponse:
        self._unsupported(Capability.ASSISTANTS)

    async def get_assistant_response(
        self, thread_id: str, run_id: str
    ) -> AssistantResponse:
        self._unsupported(Capability.ASSISTANTS)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self._model!r})"


def require_messages(messages: list[ChatMessage]) -> None:
    if not messages:
        raise ValueError("At least one message is required")

"""
Type definitions shared by every provider adapter.

None of these models are mutated after construction: the authoritative state
of assistants, threads and runs lives with the vendor.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class AIProvider(str, Enum):
    """Supported model providers"""

    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"
    DEEPSEEK = "deepseek"


Role = Literal["user", "assistant", "system"]
RunStatus = Literal["completed", "in_progress", "failed"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class AIConfig(_Frozen):
    """Selects a provider and the credentials used to talk to it.

    ``provider`` is kept as a plain string so that an unknown value reaches
    the factory and is rejected there with a descriptive error.
    """

    provider: str
    api_key: str
    model: str | None = None
    base_url: str | None = None  # Only used by DeepSeek


class ChatMessage(_Frozen):
    """A single turn in a conversation"""

    role: Role
    content: str


class ChatResponse(_Frozen):
    """Standardized response from chat completion APIs."""

    content: str
    provider: AIProvider
    model: str


class EmbeddingOptions(_Frozen):
    input: str | Annotated[list[str], Field(min_length=1)]
    model: str | None = None

    @property
    def inputs(self) -> list[str]:
        """The input as a list, whatever shape it was given in."""
        if isinstance(self.input, str):
            return [self.input]
        return list(self.input)


class EmbeddingResponse(_Frozen):
    """Standardized response from embedding APIs."""

    embeddings: list[list[float]]
    provider: AIProvider
    model: str


class ImageGenerationOptions(_Frozen):
    prompt: str
    n: int | None = None
    size: str | None = None
    quality: str | None = None
    style: str | None = None


class ImageGenerationResponse(_Frozen):
    # A slot holds "" when the vendor returned no URL for that image
    urls: list[str]
    provider: AIProvider


class Assistant(_Frozen):
    """A vendor-side named assistant configuration"""

    id: str
    name: str
    description: str | None = None
    model: str
    instructions: str | None = None


class Thread(_Frozen):
    """A vendor-owned conversation, as listed at the time of the call"""

    id: str
    messages: list[ChatMessage] = Field(default_factory=list)


class AssistantResponse(_Frozen):
    """A snapshot of a vendor-side assistant run"""

    message_id: str
    thread_id: str
    content: str
    status: RunStatus

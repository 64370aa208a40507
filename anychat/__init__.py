"""
AnyChat: one client interface over several LLM providers.

Usage:
    from anychat import AnyChat, ChatMessage

    client = AnyChat.create_client(
        {"provider": "openai", "api_key": "sk-...", "model": "gpt-4o-mini"}
    )
    response = await client.chat([ChatMessage(role="user", content="Hello")])
"""

__version__ = "0.1.0"

from anychat.capabilities import AIClient, Capability
from anychat.client import AnyChat, create_client
from anychat.exceptions import (
    AnyChatError,
    ProviderAPIError,
    UnsupportedCapabilityError,
    UnsupportedProviderError,
)
from anychat.providers import (
    ClaudeProvider,
    DeepSeekProvider,
    GeminiProvider,
    OpenAIProvider,
)
from anychat.types import (
    AIConfig,
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


__all__ = [
    # Factory
    "AnyChat",
    "create_client",
    # Capability interface
    "AIClient",
    "Capability",
    # Providers
    "ClaudeProvider",
    "DeepSeekProvider",
    "GeminiProvider",
    "OpenAIProvider",
    # Exceptions
    "AnyChatError",
    "ProviderAPIError",
    "UnsupportedCapabilityError",
    "UnsupportedProviderError",
    # Types
    "AIConfig",
    "AIProvider",
    "Assistant",
    "AssistantResponse",
    "ChatMessage",
    "ChatResponse",
    "EmbeddingOptions",
    "EmbeddingResponse",
    "ImageGenerationOptions",
    "ImageGenerationResponse",
    "RunStatus",
    "Thread",
]

"""
Factory for provider adapters.

The factory dispatches purely on ``config.provider``. Construction performs
no network I/O of its own; only what the vendor SDK does when it builds its
client.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, assert_never

from anychat.capabilities import AIClient
from anychat.config import PROVIDER_DEFAULTS, settings
from anychat.exceptions import UnsupportedProviderError
from anychat.providers import (
    ClaudeProvider,
    DeepSeekProvider,
    GeminiProvider,
    OpenAIProvider,
)
from anychat.types import AIConfig, AIProvider


logger = logging.getLogger(__name__)


def _resolve_provider(value: object) -> AIProvider:
    if isinstance(value, AIProvider):
        return value
    try:
        return AIProvider(value)
    except ValueError:
        raise UnsupportedProviderError(value) from None


def provider_class(provider: AIProvider | str) -> type[AIClient]:
    """Get the adapter class for a provider without constructing a client."""
    provider = _resolve_provider(provider)
    if provider is AIProvider.OPENAI:
        return OpenAIProvider
    elif provider is AIProvider.GEMINI:
        return GeminiProvider
    elif provider is AIProvider.CLAUDE:
        return ClaudeProvider
    elif provider is AIProvider.DEEPSEEK:
        return DeepSeekProvider
    else:
        assert_never(provider)


class AnyChat:
    """
    Entry point for creating provider clients.

    Usage:
        client = AnyChat.create_client(
            {"provider": "claude", "api_key": "sk-...", "model": "claude-3-haiku-20240307"}
        )
        response = await client.chat([ChatMessage(role="user", content="Hello")])
    """

    @staticmethod
    def create_client(
        config: AIConfig | Mapping[str, Any] | None = None,
    ) -> AIClient:
        """
        Create the adapter for the configured provider.

        Args:
            config: AIConfig, or a mapping with the same keys. When omitted the
                configuration is built from the environment settings.

        Returns:
            An AIClient for the selected provider

        Raises:
            UnsupportedProviderError: If the provider is not one of openai,
                gemini, claude or deepseek
        """
        if config is None:
            config = settings.client_config()
        elif isinstance(config, Mapping):
            # Reject the provider before validating anything else
            _resolve_provider(config.get("provider"))
            config = AIConfig(**config)

        provider = _resolve_provider(config.provider)
        model = config.model or PROVIDER_DEFAULTS[provider].chat_model
        logger.debug(f"Creating {provider.value} client for model {model}")

        if provider is AIProvider.OPENAI:
            return OpenAIProvider(config.api_key, model)
        elif provider is AIProvider.GEMINI:
            return GeminiProvider(config.api_key, model)
        elif provider is AIProvider.CLAUDE:
            return ClaudeProvider(config.api_key, model)
        elif provider is AIProvider.DEEPSEEK:
            return DeepSeekProvider(
                config.api_key,
                model,
                config.base_url or PROVIDER_DEFAULTS[provider].base_url,
            )
        else:
            assert_never(provider)


def create_client(config: AIConfig | Mapping[str, Any] | None = None) -> AIClient:
    """
    Create a provider client.

    This is a convenience function that delegates to AnyChat.create_client().
    """
    return AnyChat.create_client(config)

import json
import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from anychat.types import AIConfig, AIProvider


load_dotenv()


logger = logging.getLogger(__name__)


class ProviderDefaults(BaseModel):
    """Fixed per-provider constants used when the caller does not override them"""

    model_config = ConfigDict(frozen=True)

    display_name: str
    chat_model: str
    embedding_model: str
    base_url: str | None = None
    max_tokens: int | None = None
    api_version: str | None = None


PROVIDER_DEFAULTS: Mapping[AIProvider, ProviderDefaults] = MappingProxyType(
    {
        AIProvider.OPENAI: ProviderDefaults(
            display_name="OpenAI",
            chat_model="gpt-3.5-turbo",
            embedding_model="text-embedding-ada-002",
        ),
        AIProvider.GEMINI: ProviderDefaults(
            display_name="Gemini",
            chat_model="gemini-pro",
            embedding_model="embedding-001",
        ),
        AIProvider.CLAUDE: ProviderDefaults(
            display_name="Claude",
            chat_model="claude-3-opus-20240229",
            embedding_model="claude-3-embedding-20240229",
            base_url="https://api.anthropic.com/v1",
            max_tokens=1024,
            api_version="2023-06-01",
        ),
        AIProvider.DEEPSEEK: ProviderDefaults(
            display_name="DeepSeek",
            chat_model="deepseek-chat",
            embedding_model="deepseek-embedding",
            base_url="https://api.deepseek.com/v1",
        ),
    }
)


class ImageDefaults(BaseModel):
    model_config = ConfigDict(frozen=True)

    n: int = 1
    size: str = "1024x1024"
    quality: str = "standard"
    style: str = "natural"


OPENAI_IMAGE_DEFAULTS = ImageDefaults()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ANYCHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra environment variables
    )

    provider: str = AIProvider.OPENAI.value
    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None

    # Conventional vendor variables, used when ANYCHAT_API_KEY is unset
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ANYCHAT_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ANYCHAT_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    anthropic_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ANYCHAT_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY"
        ),
    )
    deepseek_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ANYCHAT_DEEPSEEK_API_KEY", "DEEPSEEK_API_KEY"
        ),
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    def vendor_api_key(self, provider: str) -> str | None:
        """Get the conventional vendor key for a provider, if one is set."""
        return {
            AIProvider.OPENAI.value: self.openai_api_key,
            AIProvider.GEMINI.value: self.gemini_api_key,
            AIProvider.CLAUDE.value: self.anthropic_api_key,
            AIProvider.DEEPSEEK.value: self.deepseek_api_key,
        }.get(provider)

    def client_config(self, **overrides: Any) -> AIConfig:
        """
        Build an AIConfig from these settings.

        Args:
            **overrides: Values that take precedence over the settings. A value
                of None means "not given" and falls back to the settings.

        Returns:
            AIConfig ready to pass to AnyChat.create_client()
        """
        values = {
            "provider": self.provider,
            "api_key": self.api_key,
            "model": self.model,
            "base_url": self.base_url,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not values["api_key"]:
            values["api_key"] = self.vendor_api_key(values["provider"]) or ""
            if not values["api_key"]:
                logger.warning(f"No API key configured for {values['provider']}")

        return AIConfig(**values)


settings = Settings()


def load_config_file(config_path: str) -> dict[str, Any]:
    """Load client configuration from a YAML or JSON file."""
    if not os.path.exists(config_path):
        logger.warning(f"Config file {config_path} not found")
        return {}
    with open(config_path) as f:
        if config_path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f) or {}
        # Assume JSON
        return json.load(f) or {}

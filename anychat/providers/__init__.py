from anychat.providers.claude import ClaudeProvider
from anychat.providers.deepseek import DeepSeekProvider
from anychat.providers.gemini import GeminiProvider
from anychat.providers.openai import OpenAIProvider


__all__ = [
    "ClaudeProvider",
    "DeepSeekProvider",
    "GeminiProvider",
    "OpenAIProvider",
]

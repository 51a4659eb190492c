"""LLM provider factory."""

from stocksage.core.config import settings
from stocksage.services.llm.base import BaseLLMProvider


def get_llm_provider(api_key: str) -> BaseLLMProvider:
    """Factory function that returns the configured LLM provider for a user's key."""
    if settings.llm_provider == "gemini":
        from stocksage.services.llm.gemini import GeminiProvider
        return GeminiProvider.from_settings(api_key)
    else:
        raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")

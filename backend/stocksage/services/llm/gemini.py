"""Google Gemini LLM provider."""

import asyncio
import logging

import httpx
from google import genai
from google.genai import errors, types

from stocksage.core.config import settings
from stocksage.services.chat.prompts import SYSTEM_PROMPT
from stocksage.services.llm.base import (
    BaseLLMProvider,
    CompletionError,
    CompletionErrorKind,
    LLMResponse,
    Message,
)

logger = logging.getLogger(__name__)

_UNAUTHORIZED_MARKERS = ("API_KEY_INVALID", "API key not valid", "PERMISSION_DENIED", "UNAUTHENTICATED")


def classify_error(exc: BaseException) -> CompletionErrorKind:
    """Map a provider or transport failure onto the closed error-kind set."""
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return CompletionErrorKind.TIMEOUT

    if isinstance(exc, errors.APIError):
        status = (exc.status or "").upper()
        if exc.code == 429 or status == "RESOURCE_EXHAUSTED":
            return CompletionErrorKind.QUOTA
        if exc.code in (401, 403):
            return CompletionErrorKind.UNAUTHORIZED
        if exc.code in (408, 504) or status == "DEADLINE_EXCEEDED":
            return CompletionErrorKind.TIMEOUT
        text = f"{exc.status} {exc.message} {exc.details}"
        if any(marker in text for marker in _UNAUTHORIZED_MARKERS):
            return CompletionErrorKind.UNAUTHORIZED

    return CompletionErrorKind.OTHER


class GeminiProvider(BaseLLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        max_output_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: float = 60.0,
        system_instruction: str = SYSTEM_PROMPT,
    ):
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )
        self.model = model
        self.config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )

    @classmethod
    def from_settings(cls, api_key: str) -> "GeminiProvider":
        return cls(
            api_key=api_key,
            model=settings.llm_model,
            max_output_tokens=settings.llm_max_output_tokens,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout_seconds,
        )

    async def complete(self, messages: list[Message]) -> LLMResponse:
        contents = [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part(text=m.content)],
            )
            for m in messages
        ]
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=self.config,
            )
        except Exception as e:
            kind = classify_error(e)
            logger.warning(f"Gemini request failed ({kind.value}): {e}")
            raise CompletionError(kind, str(e)) from e

        return LLMResponse(content=response.text)

"""Abstract LLM provider interface. All providers must implement this."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


@dataclass
class Message:
    role: str  # "user" | "assistant"
    content: str


@dataclass
class LLMResponse:
    content: str | None


class CompletionErrorKind(str, Enum):
    QUOTA = "quota"
    UNAUTHORIZED = "unauthorized"
    TIMEOUT = "timeout"
    OTHER = "other"


class CompletionError(Exception):
    """Raised by providers; ``kind`` is the only thing callers branch on."""

    def __init__(self, kind: CompletionErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class BaseLLMProvider(ABC):
    @abstractmethod
    async def complete(self, messages: list[Message]) -> LLMResponse:
        """Send the conversation (oldest first) and return the assistant reply.

        Implementations prepend their own system instruction and raise
        CompletionError for every failure.
        """
        ...

"""Stateful chat client: conversation history, credential lifecycle and the send loop.

The client is driven from a single event loop. ``busy`` is advisory: while a
completion is in flight further submits are ignored, nothing is queued and
nothing can be cancelled.
"""

import logging
import time
from datetime import datetime
from enum import Enum
from typing import Callable

from stocksage.models.message import ChatMessage, Role
from stocksage.models.share import ShareLink
from stocksage.services.chat import export
from stocksage.services.chat.credentials import CredentialStore
from stocksage.services.chat.prompts import SUGGESTIONS
from stocksage.services.llm import get_llm_provider
from stocksage.services.llm.base import (
    BaseLLMProvider,
    CompletionError,
    CompletionErrorKind,
    Message,
)
from stocksage.services.share.client import ShareClient

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response received."

ERROR_NOTICES: dict[CompletionErrorKind, str] = {
    CompletionErrorKind.QUOTA: (
        "⚠️ API quota exceeded. Please check your Gemini billing and usage limits at "
        "aistudio.google.com. You may need to upgrade your plan or wait for your quota to reset."
    ),
    CompletionErrorKind.UNAUTHORIZED: "🔑 Invalid API key. Please check your API key and try again.",
    CompletionErrorKind.TIMEOUT: "⏱️ Request timed out. Please try again.",
}

CLIPBOARD_OK = "✅ Conversation copied to clipboard! You can now paste it anywhere."
CLIPBOARD_FAILED = "❌ Failed to copy to clipboard. Please try downloading instead."


def error_notice(kind: CompletionErrorKind, detail: str) -> str:
    return ERROR_NOTICES.get(kind) or f"❌ Error: {detail}"


class View(str, Enum):
    CREDENTIAL_ENTRY = "credential_entry"
    CHAT = "chat"


class ChatClient:
    def __init__(
        self,
        credentials: CredentialStore,
        provider_factory: Callable[[str], BaseLLMProvider] = get_llm_provider,
    ):
        self.credentials = credentials
        self.provider_factory = provider_factory
        self.messages: list[ChatMessage] = []
        self.input_text = ""
        self.busy = False
        self._last_id = 0

        # Read once at startup
        self.api_key = credentials.load() or ""
        self.view = View.CHAT if self.api_key else View.CREDENTIAL_ENTRY

    # -------------------------------------------------
    # Credential lifecycle
    # -------------------------------------------------
    def save_credential(self, api_key: str) -> None:
        if not api_key or not api_key.strip():
            raise ValueError("Please enter a valid API key")
        self.credentials.save(api_key)
        self.api_key = api_key
        self.view = View.CHAT

    def clear_credential(self) -> None:
        """Forget the key and drop the whole conversation."""
        self.credentials.clear()
        self.api_key = ""
        self.view = View.CREDENTIAL_ENTRY
        self.messages = []
        self.input_text = ""

    # -------------------------------------------------
    # Conversation
    # -------------------------------------------------
    def _next_id(self) -> str:
        now_ms = int(time.time() * 1000)
        self._last_id = max(now_ms, self._last_id + 1)
        return str(self._last_id)

    def _append(self, role: Role, content: str) -> ChatMessage:
        message = ChatMessage(id=self._next_id(), role=role, content=content)
        self.messages.append(message)
        return message

    def use_suggestion(self, index: int) -> str:
        self.input_text = SUGGESTIONS[index][1]
        return self.input_text

    async def submit(self, text: str | None = None) -> ChatMessage | None:
        """Send one turn. Returns the assistant message, or None if nothing was sent."""
        text = self.input_text if text is None else text
        if not text.strip() or not self.api_key or self.busy:
            return None

        history = [Message(role=m.role.value, content=m.content) for m in self.messages]
        history.append(Message(role=Role.USER.value, content=text))

        self._append(Role.USER, text)
        self.input_text = ""
        self.busy = True
        try:
            provider = self.provider_factory(self.api_key)
            response = await provider.complete(history)
            reply = self._append(Role.ASSISTANT, response.content or NO_RESPONSE)
        except CompletionError as e:
            reply = self._append(Role.ASSISTANT, error_notice(e.kind, e.message))
        except Exception as e:
            logger.exception("Unexpected error while requesting a completion")
            reply = self._append(Role.ASSISTANT, error_notice(CompletionErrorKind.OTHER, str(e)))
        finally:
            self.busy = False
        return reply

    # -------------------------------------------------
    # Export
    # -------------------------------------------------
    def export_json(self, now: datetime | None = None) -> str | None:
        if not self.messages:
            return None
        return export.to_json(self.messages, now=now)

    def export_csv(self) -> str | None:
        if not self.messages:
            return None
        return export.to_csv(self.messages)

    def export_text(self, now: datetime | None = None) -> str | None:
        if not self.messages:
            return None
        return export.to_text(self.messages, now=now)

    def copy_to_clipboard(
        self,
        clipboard: Callable[[str], None],
        notify: Callable[[str], None],
    ) -> bool:
        if not self.messages:
            return False
        try:
            clipboard(export.to_clipboard_text(self.messages))
        except Exception as e:
            logger.error(f"Failed to copy to clipboard: {e}")
            notify(CLIPBOARD_FAILED)
            return False
        notify(CLIPBOARD_OK)
        return True

    # -------------------------------------------------
    # Sharing
    # -------------------------------------------------
    async def share(self, share_client: ShareClient, title: str | None = None) -> ShareLink | None:
        if not self.messages:
            return None
        return await share_client.create(list(self.messages), title=title)

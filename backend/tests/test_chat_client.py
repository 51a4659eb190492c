"""Tests for the chat client: send loop, error notices, credentials and exports."""

import asyncio
import json

import httpx
import pytest

from stocksage.models.message import Role
from stocksage.services.chat.client import (
    CLIPBOARD_FAILED,
    CLIPBOARD_OK,
    ERROR_NOTICES,
    NO_RESPONSE,
    ChatClient,
    View,
)
from stocksage.services.chat.credentials import MemoryCredentialStore
from stocksage.services.llm.base import CompletionError, CompletionErrorKind
from stocksage.services.share.client import ShareClient


def _client(provider, key="test-key"):
    return ChatClient(MemoryCredentialStore(key), provider_factory=lambda api_key: provider)


def test_submit_appends_user_and_assistant(fake_provider):
    chat = _client(fake_provider)
    chat.input_text = "Is NVDA overvalued?"

    reply = asyncio.run(chat.submit())

    assert reply is not None
    assert [m.role for m in chat.messages] == [Role.USER, Role.ASSISTANT]
    assert chat.messages[0].content == "Is NVDA overvalued?"
    assert chat.messages[1].content == "Buy low, sell high."
    assert chat.input_text == ""
    assert chat.busy is False


def test_submit_sends_full_history(fake_provider):
    chat = _client(fake_provider)
    asyncio.run(chat.submit("first"))
    asyncio.run(chat.submit("second"))

    sent = fake_provider.calls[-1]
    assert [(m.role, m.content) for m in sent] == [
        ("user", "first"),
        ("assistant", "Buy low, sell high."),
        ("user", "second"),
    ]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_input_is_a_noop(fake_provider, text):
    chat = _client(fake_provider)
    assert asyncio.run(chat.submit(text)) is None
    assert chat.messages == []
    assert fake_provider.calls == []


def test_missing_credential_is_a_noop(fake_provider):
    chat = _client(fake_provider, key=None)
    assert chat.view == View.CREDENTIAL_ENTRY
    assert asyncio.run(chat.submit("hello")) is None
    assert chat.messages == []
    assert fake_provider.calls == []


def test_busy_is_set_while_request_in_flight(make_provider):
    seen_busy = []

    class BusyRecordingProvider(make_provider):
        async def complete(self, messages):
            seen_busy.append(chat.busy)
            return await super().complete(messages)

    chat = _client(BusyRecordingProvider())
    asyncio.run(chat.submit("hi"))

    assert seen_busy == [True]
    assert chat.busy is False


def test_submit_ignored_while_busy(fake_provider):
    chat = _client(fake_provider)
    chat.busy = True
    assert asyncio.run(chat.submit("hello")) is None
    assert fake_provider.calls == []


def test_empty_reply_uses_fallback(make_provider):
    chat = _client(make_provider(reply=None))
    asyncio.run(chat.submit("hi"))
    assert chat.messages[-1].content == NO_RESPONSE


def test_unauthorized_error_becomes_assistant_message(make_provider):
    provider = make_provider(error=CompletionError(CompletionErrorKind.UNAUTHORIZED, "401 bad key"))
    chat = _client(provider)

    asyncio.run(chat.submit("hi"))

    assert len(chat.messages) == 2
    notice = chat.messages[-1]
    assert notice.role == Role.ASSISTANT
    assert notice.content == ERROR_NOTICES[CompletionErrorKind.UNAUTHORIZED]
    assert "Invalid API key" in notice.content
    assert chat.busy is False


@pytest.mark.parametrize(
    "kind, expected",
    [
        (CompletionErrorKind.QUOTA, "quota exceeded"),
        (CompletionErrorKind.TIMEOUT, "timed out"),
        (CompletionErrorKind.OTHER, "❌ Error: socket closed"),
    ],
)
def test_error_kinds_map_to_notices(make_provider, kind, expected):
    chat = _client(make_provider(error=CompletionError(kind, "socket closed")))
    asyncio.run(chat.submit("hi"))
    assert expected in chat.messages[-1].content
    assert chat.busy is False


def test_unexpected_exception_is_reported_as_other(make_provider):
    chat = _client(make_provider(error=RuntimeError("kaboom")))
    asyncio.run(chat.submit("hi"))
    assert chat.messages[-1].content == "❌ Error: kaboom"
    assert chat.busy is False


def test_message_ids_are_unique_and_ordered(fake_provider):
    chat = _client(fake_provider)
    for text in ["a", "b", "c"]:
        asyncio.run(chat.submit(text))
    ids = [int(m.id) for m in chat.messages]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_credential_lifecycle(fake_provider):
    store = MemoryCredentialStore()
    chat = ChatClient(store, provider_factory=lambda api_key: fake_provider)
    assert chat.view == View.CREDENTIAL_ENTRY

    with pytest.raises(ValueError):
        chat.save_credential("   ")
    assert store.load() is None

    chat.save_credential("secret")
    assert store.load() == "secret"
    assert chat.view == View.CHAT

    asyncio.run(chat.submit("hi"))
    chat.input_text = "draft"
    chat.clear_credential()

    assert store.load() is None
    assert chat.api_key == ""
    assert chat.view == View.CREDENTIAL_ENTRY
    assert chat.messages == []
    assert chat.input_text == ""


def test_existing_credential_opens_chat_view(fake_provider):
    chat = _client(fake_provider, key="saved")
    assert chat.view == View.CHAT
    assert chat.api_key == "saved"


def test_use_suggestion_fills_input(fake_provider):
    chat = _client(fake_provider)
    assert "AAPL" in chat.use_suggestion(0)
    assert chat.input_text == chat.use_suggestion(0)


def test_exports_require_messages(fake_provider):
    chat = _client(fake_provider)
    assert chat.export_json() is None
    assert chat.export_csv() is None
    assert chat.export_text() is None

    asyncio.run(chat.submit("hi"))
    before = list(chat.messages)
    assert json.loads(chat.export_json())["totalMessages"] == 2
    assert chat.export_csv().count("\n") == 2
    assert "YOU:" in chat.export_text()
    assert chat.messages == before


def test_copy_to_clipboard(fake_provider):
    chat = _client(fake_provider)
    copied, notices = [], []
    assert chat.copy_to_clipboard(copied.append, notices.append) is False
    assert copied == [] and notices == []

    asyncio.run(chat.submit("hi"))
    assert chat.copy_to_clipboard(copied.append, notices.append) is True
    assert "Total Messages: 2" in copied[0]
    assert notices == [CLIPBOARD_OK]


def test_copy_to_clipboard_failure_notifies(fake_provider):
    chat = _client(fake_provider)
    asyncio.run(chat.submit("hi"))

    def broken(text):
        raise OSError("no display")

    notices = []
    assert chat.copy_to_clipboard(broken, notices.append) is False
    assert notices == [CLIPBOARD_FAILED]
    assert len(chat.messages) == 2


def test_share_posts_conversation(client, fake_provider):
    from stocksage.main import app

    chat = _client(fake_provider)
    share_client = ShareClient("http://testserver", transport=httpx.ASGITransport(app=app))
    assert asyncio.run(chat.share(share_client)) is None

    asyncio.run(chat.submit("Share me"))
    link = asyncio.run(chat.share(share_client, title="My analysis"))

    assert link.share_url.endswith(f"/shared/{link.share_id}")
    record = client.get("/api/share", params={"id": link.share_id}).json()
    assert record["title"] == "My analysis"
    assert record["totalMessages"] == 2
    assert record["messages"][0]["content"] == "Share me"
    assert record["messages"][0]["timestamp"] == chat.messages[0].timestamp.isoformat()

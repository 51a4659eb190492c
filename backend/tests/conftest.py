"""Shared test fixtures for backend tests."""

import pytest
from fastapi.testclient import TestClient

from stocksage.api.share import get_store
from stocksage.services.llm.base import BaseLLMProvider, LLMResponse, Message
from stocksage.services.share.memory import MemoryShareStore


class FakeProvider(BaseLLMProvider):
    """Records every request and replies with a canned answer or raises."""

    def __init__(self, reply: str | None = "Buy low, sell high.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[Message]] = []

    async def complete(self, messages: list[Message]) -> LLMResponse:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply)


@pytest.fixture
def share_store():
    """Fresh in-memory store per test so shares never leak between tests."""
    return MemoryShareStore()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def make_provider():
    """Build a FakeProvider with a custom reply or error."""
    return FakeProvider


@pytest.fixture
def client(share_store):
    """FastAPI TestClient with the share store swapped for the per-test one."""
    from stocksage.main import app

    app.dependency_overrides[get_store] = lambda: share_store

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()

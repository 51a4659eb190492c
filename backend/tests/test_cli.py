"""Tests for the command-line entry point."""

import pytest

from stocksage import cli
from stocksage.services.chat.credentials import MemoryCredentialStore
from stocksage.viewer import ViewState, ViewStatus


def test_requires_subcommand():
    with pytest.raises(SystemExit):
        cli.main([])


def test_view_prints_page_and_exit_code(monkeypatch, capsys):
    async def fake_load(self, share_id):
        assert share_id == "abc"
        self.state = ViewState(ViewStatus.ERROR, error="nope")
        return self.state

    monkeypatch.setattr(cli.SharedConversationViewer, "load", fake_load)

    assert cli.main(["view", "http://localhost:8000/shared/abc"]) == 1
    assert "Conversation Not Found" in capsys.readouterr().out


def test_clipboard_without_utility_raises(monkeypatch):
    monkeypatch.setattr(cli.shutil, "which", lambda name: None)
    with pytest.raises(RuntimeError):
        cli.copy_to_system_clipboard("text")


def test_chat_exits_cleanly_on_eof_at_key_prompt(monkeypatch):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr(cli, "FileCredentialStore", lambda path: MemoryCredentialStore())
    monkeypatch.setattr("builtins.input", eof)

    assert cli.main(["chat"]) == 0

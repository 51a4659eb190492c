"""Tests for settings path derivation."""

import pytest

from stocksage.core.config import Settings


@pytest.fixture(autouse=True)
def clean_path_env(monkeypatch):
    for name in ("STOCKSAGE_DATA_DIR", "STOCKSAGE_DB_PATH", "STOCKSAGE_CREDENTIAL_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_paths_follow_data_dir(tmp_path):
    s = Settings(data_dir=tmp_path)
    assert s.db_path == tmp_path / "stocksage.db"
    assert s.credential_file == tmp_path / "credentials.json"


def test_data_dir_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STOCKSAGE_DATA_DIR", str(tmp_path))
    s = Settings()
    assert s.data_dir == tmp_path
    assert s.db_path == tmp_path / "stocksage.db"


def test_explicit_paths_are_kept(tmp_path):
    s = Settings(data_dir=tmp_path, db_path=tmp_path / "elsewhere.db")
    assert s.db_path == tmp_path / "elsewhere.db"
    assert s.credential_file == tmp_path / "credentials.json"

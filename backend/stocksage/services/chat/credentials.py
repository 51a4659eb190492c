"""Credential persistence for the chat client.

The file store behaves like browser local storage: a flat JSON object of
string keys to string values, of which the chat client owns one key.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "gemini-api-key"


class CredentialStore(ABC):
    @abstractmethod
    def load(self) -> str | None:
        ...

    @abstractmethod
    def save(self, credential: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryCredentialStore(CredentialStore):
    def __init__(self, credential: str | None = None):
        self.credential = credential

    def load(self) -> str | None:
        return self.credential

    def save(self, credential: str) -> None:
        self.credential = credential

    def clear(self) -> None:
        self.credential = None


class FileCredentialStore(CredentialStore):
    def __init__(self, path: Path, key: str = DEFAULT_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def load(self) -> str | None:
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def save(self, credential: str) -> None:
        data = self._read()
        data[self.key] = credential
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if data.pop(self.key, None) is not None:
            self._write(data)

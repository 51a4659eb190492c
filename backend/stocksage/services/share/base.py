"""Abstract storage for shared conversation snapshots. All stores must implement this."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from stocksage.models.share import SharedRecord


class ShareStore(ABC):
    def __init__(self, ttl: timedelta | None = None):
        self.ttl = ttl

    @abstractmethod
    def put(self, record: SharedRecord) -> None:
        """Store a record under its id, replacing any existing one."""
        ...

    @abstractmethod
    def get(self, share_id: str) -> SharedRecord | None:
        """Return the record for share_id, or None if unknown or expired."""
        ...

    def is_expired(self, record: SharedRecord, now: datetime | None = None) -> bool:
        if self.ttl is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now - record.created_at >= self.ttl

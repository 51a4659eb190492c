"""Process-local share store. Records are lost on restart."""

import logging

from stocksage.models.share import SharedRecord
from stocksage.services.share.base import ShareStore

logger = logging.getLogger(__name__)


class MemoryShareStore(ShareStore):
    def __init__(self, ttl=None):
        super().__init__(ttl)
        self._records: dict[str, SharedRecord] = {}

    def put(self, record: SharedRecord) -> None:
        self._records[record.id] = record

    def get(self, share_id: str) -> SharedRecord | None:
        record = self._records.get(share_id)
        if record is None:
            return None
        if self.is_expired(record):
            logger.debug(f"Evicting expired share {share_id}")
            self._records.pop(share_id, None)
            return None
        return record

    def __len__(self) -> int:
        return len(self._records)

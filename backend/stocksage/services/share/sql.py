"""SQLModel-backed share store for deployments that need records to survive restarts."""

from sqlalchemy.engine import Engine
from sqlmodel import Session

from stocksage.models.share import SharedConversation, SharedRecord
from stocksage.services.share.base import ShareStore


class SQLShareStore(ShareStore):
    def __init__(self, engine: Engine, ttl=None):
        super().__init__(ttl)
        self.engine = engine

    def put(self, record: SharedRecord) -> None:
        with Session(self.engine) as session:
            # merge so a colliding id overwrites, matching the memory store
            session.merge(SharedConversation.from_record(record))
            session.commit()

    def get(self, share_id: str) -> SharedRecord | None:
        with Session(self.engine) as session:
            row = session.get(SharedConversation, share_id)
            if not row:
                return None
            record = row.to_record()
        if self.is_expired(record):
            return None
        return record

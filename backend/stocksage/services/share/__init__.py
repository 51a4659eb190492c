"""Share store and service factories."""

from datetime import timedelta
from functools import lru_cache

from stocksage.core.config import settings
from stocksage.services.share.base import ShareStore
from stocksage.services.share.service import ShareService


def _ttl() -> timedelta | None:
    if settings.share_ttl_days <= 0:
        return None
    return timedelta(days=settings.share_ttl_days)


@lru_cache
def get_share_store() -> ShareStore:
    """Factory function that returns the configured (process-wide) share store."""
    if settings.share_store == "memory":
        from stocksage.services.share.memory import MemoryShareStore
        return MemoryShareStore(ttl=_ttl())
    elif settings.share_store == "sqlite":
        from stocksage.core.database import engine
        from stocksage.services.share.sql import SQLShareStore
        return SQLShareStore(engine, ttl=_ttl())
    else:
        raise ValueError(f"Unknown share store: {settings.share_store}")


def build_share_service(store: ShareStore) -> ShareService:
    return ShareService(
        store,
        default_title=settings.share_default_title,
        expires_in=settings.share_expires_in,
        public_host=settings.public_host,
    )

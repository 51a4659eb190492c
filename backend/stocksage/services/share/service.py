"""Create and retrieve shareable conversation snapshots."""

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

from pydantic import ValidationError

from stocksage.models.share import SharedMessage, SharedRecord, ShareLink
from stocksage.services.share.base import ShareStore
from stocksage.services.share.errors import (
    MissingShareIdError,
    ShareNotFoundError,
    ShareValidationError,
)

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
_FRAGMENT_SPACE = 36**11


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_share_id() -> str:
    """Two concatenated random base-36 fragments. Collisions are not checked."""
    return _to_base36(secrets.randbelow(_FRAGMENT_SPACE)) + _to_base36(secrets.randbelow(_FRAGMENT_SPACE))


class ShareService:
    def __init__(
        self,
        store: ShareStore,
        default_title: str,
        expires_in: str,
        public_host: str = "",
    ):
        self.store = store
        self.default_title = default_title
        self.expires_in = expires_in
        self.public_host = public_host

    def share_url(self, share_id: str, origin: str) -> str:
        """Build the public URL, preferring the deployment host over the request origin."""
        if self.public_host:
            host = self.public_host.rstrip("/")
            base = host if urlparse(host).scheme in ("http", "https") else f"https://{host}"
        else:
            base = origin.rstrip("/")
        return f"{base}/shared/{share_id}"

    def create(self, messages: Any, title: str | None = None, origin: str = "") -> ShareLink:
        if messages is None or not isinstance(messages, list):
            raise ShareValidationError("Invalid messages data")
        try:
            projected = [SharedMessage.model_validate(m) for m in messages]
        except ValidationError as e:
            raise ShareValidationError("Invalid messages data") from e

        if title is not None and not isinstance(title, str):
            raise ShareValidationError("Invalid title")

        share_id = generate_share_id()
        record = SharedRecord(
            id=share_id,
            title=title or self.default_title,
            messages=projected,
            created_at=datetime.now(timezone.utc),
            total_messages=len(messages),
        )
        self.store.put(record)
        logger.info(f"Created share {share_id} ({record.total_messages} messages)")

        return ShareLink(
            share_id=share_id,
            share_url=self.share_url(share_id, origin),
            expires_in=self.expires_in,
        )

    def retrieve(self, share_id: str | None) -> SharedRecord:
        if not share_id:
            raise MissingShareIdError("Share ID is required")
        record = self.store.get(share_id)
        if record is None:
            logger.debug(f"Share {share_id} not found")
            raise ShareNotFoundError("Conversation not found")
        return record

"""HTTP client for the share API, used by the chat client and the shared-conversation viewer."""

from typing import Sequence

import httpx

from stocksage.models.message import ChatMessage
from stocksage.models.share import SharedRecord, ShareLink


class ShareClient:
    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=self.timeout)

    async def create(self, messages: Sequence[ChatMessage], title: str | None = None) -> ShareLink:
        """Upload a conversation snapshot. Raises httpx.HTTPStatusError on non-2xx."""
        payload: dict = {
            "messages": [
                {
                    "role": m.role.value,
                    "content": m.content,
                    "timestamp": m.timestamp.isoformat(),
                }
                for m in messages
            ]
        }
        if title:
            payload["title"] = title

        async with self._client() as client:
            resp = await client.post("/api/share", json=payload)
            resp.raise_for_status()
            return ShareLink.model_validate(resp.json())

    async def fetch(self, share_id: str) -> SharedRecord:
        """Read a shared record. Raises httpx.HTTPStatusError on non-2xx."""
        async with self._client() as client:
            resp = await client.get("/api/share", params={"id": share_id})
            resp.raise_for_status()
            return SharedRecord.model_validate(resp.json())

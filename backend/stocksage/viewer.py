"""Read-only viewer for shared conversations.

Fetches a record from the share API and renders it as a plain-text page.
A load ends in one of two terminal states (error or success); ``LOADING``
is only observable before ``load`` returns.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlparse

import httpx

from stocksage.models.share import SharedRecord
from stocksage.services.chat.export import role_label
from stocksage.services.share.client import ShareClient

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "This shared conversation could not be found. It may have expired or been removed."
FETCH_FAILED_MESSAGE = "Failed to load the shared conversation. Please try again."
CONNECTION_FAILED_MESSAGE = "Failed to load the shared conversation. Please check your connection."


class ViewStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass
class ViewState:
    status: ViewStatus
    record: SharedRecord | None = None
    error: str | None = None
    not_found: bool = False


def share_id_from_url(value: str) -> str:
    """Accept either a bare share id or a full ``.../shared/<id>`` URL."""
    path = urlparse(value).path if "://" in value else value
    parts = [p for p in path.split("/") if p]
    if len(parts) >= 2 and parts[-2] == "shared":
        return parts[-1]
    return parts[-1] if parts else ""


def format_date(dt: datetime) -> str:
    """e.g. ``October 17, 2026, 03:04 PM``"""
    local = dt.astimezone()
    return f"{local:%B} {local.day}, {local:%Y, %I:%M %p}"


def format_time(timestamp: Any) -> str:
    if timestamp is None or timestamp == "":
        return ""
    if not isinstance(timestamp, str):
        return str(timestamp)
    try:
        parsed = datetime.fromisoformat(timestamp)
    except ValueError:
        return timestamp
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return f"{parsed:%I:%M:%S %p}"


def render(state: ViewState) -> str:
    if state.status == ViewStatus.LOADING:
        return "Loading Shared Conversation...\nPlease wait while we fetch the conversation data.\n"

    if state.status == ViewStatus.ERROR or state.record is None:
        return f"Conversation Not Found\n{state.error or FETCH_FAILED_MESSAGE}\n"

    record = state.record
    lines = [
        f"📊 {record.title}",
        f"🗓️ Shared on {format_date(record.created_at)} | "
        f"💬 {record.total_messages} messages | 👁️ Read-only view",
        "=" * 60,
        "",
    ]
    for message in record.messages:
        stamp = format_time(message.timestamp)
        prefix = f"[{stamp}] " if stamp else ""
        lines.append(f"{prefix}{role_label(message.role)}:")
        lines.append(message.content)
        lines.append("")
        lines.append("─" * 40)
    lines.append("")
    lines.append("📖 This is a read-only view of a StockSage AI conversation.")
    return "\n".join(lines) + "\n"


class SharedConversationViewer:
    def __init__(self, share_client: ShareClient):
        self.share_client = share_client
        self.state = ViewState(ViewStatus.LOADING)

    async def load(self, share_id: str) -> ViewState:
        self.state = ViewState(ViewStatus.LOADING)
        try:
            record = await self.share_client.fetch(share_id)
        except httpx.HTTPStatusError as e:
            not_found = e.response.status_code == 404
            self.state = ViewState(
                ViewStatus.ERROR,
                error=NOT_FOUND_MESSAGE if not_found else FETCH_FAILED_MESSAGE,
                not_found=not_found,
            )
        except httpx.HTTPError as e:
            logger.error(f"Error fetching shared conversation {share_id}: {e}")
            self.state = ViewState(ViewStatus.ERROR, error=CONNECTION_FAILED_MESSAGE)
        except ValueError as e:
            logger.error(f"Malformed shared conversation {share_id}: {e}")
            self.state = ViewState(ViewStatus.ERROR, error=FETCH_FAILED_MESSAGE)
        else:
            self.state = ViewState(ViewStatus.SUCCESS, record=record)
        return self.state

    def render(self) -> str:
        return render(self.state)

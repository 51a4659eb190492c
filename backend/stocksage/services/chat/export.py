"""Conversation export formats - JSON, CSV and plain-text transcripts.

All functions are pure: they read a message sequence and return text.
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Sequence

from stocksage.models.message import ChatMessage, Role

CHATBOT_LABEL = "StockSage AI - Stock Market Analysis"
TRANSCRIPT_TITLE = "StockSage AI - Stock Market Analysis Conversation"
CSV_HEADER = "Role,Content,Timestamp"

_BANNER = "=" * 60
_DIVIDER = "─" * 40


def role_label(role: Role | str) -> str:
    return "YOU" if role == Role.USER else "STOCKSAGE AI"


def format_local_datetime(dt: datetime) -> str:
    """Render like en-US ``toLocaleString``: 10/17/2026, 3:04:05 PM."""
    local = dt.astimezone()
    hour = local.hour % 12 or 12
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local:%M:%S %p}"


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def export_filename(extension: str, now: datetime | None = None) -> str:
    return f"stocksage-conversation-{_now(now).date().isoformat()}.{extension}"


def to_json(messages: Sequence[ChatMessage], now: datetime | None = None) -> str:
    data = {
        "exportDate": _now(now).isoformat(),
        "chatbot": CHATBOT_LABEL,
        "totalMessages": len(messages),
        "conversation": [
            {
                "role": m.role.value,
                "content": m.content,
                "timestamp": m.timestamp.isoformat(),
            }
            for m in messages
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def _single_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def to_csv(messages: Sequence[ChatMessage]) -> str:
    """One quoted row per message; embedded quotes doubled, newlines flattened."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for m in messages:
        writer.writerow([m.role.value, _single_line(m.content), m.timestamp.isoformat()])
    rows = buf.getvalue().rstrip("\n")
    return f"{CSV_HEADER}\n{rows}" if rows else CSV_HEADER


def _transcript_header(count: int, now: datetime | None) -> str:
    return (
        f"{TRANSCRIPT_TITLE}\n"
        f"Export Date: {format_local_datetime(_now(now))}\n"
        f"Total Messages: {count}\n"
        f"{_BANNER}\n\n"
    )


def _transcript_body(messages: Sequence[ChatMessage]) -> str:
    return "\n".join(
        f"[{format_local_datetime(m.timestamp)}] {role_label(m.role)}:\n{m.content}\n\n{_DIVIDER}\n"
        for m in messages
    )


def to_text(messages: Sequence[ChatMessage], now: datetime | None = None) -> str:
    footer = (
        f"\n{_BANNER}\n"
        "End of conversation export from StockSage AI\n"
        "Visit: https://aistudio.google.com for more AI tools"
    )
    return _transcript_header(len(messages), now) + _transcript_body(messages) + footer


def to_clipboard_text(messages: Sequence[ChatMessage], now: datetime | None = None) -> str:
    return _transcript_header(len(messages), now) + _transcript_body(messages)

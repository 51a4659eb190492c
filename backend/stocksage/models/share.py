"""Shared conversation snapshot models.

``SharedRecord`` is the wire/domain shape returned by the share API (camelCase
on the wire). ``SharedConversation`` is the SQL table used by the sqlite store.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from stocksage.models.message import Role


class SharedMessage(BaseModel):
    role: Role
    content: str
    timestamp: Any = None  # stored exactly as the client sent it


class SharedRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    title: str
    messages: list[SharedMessage]
    created_at: datetime = PydanticField(alias="createdAt")
    total_messages: int = PydanticField(alias="totalMessages")


class ShareLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    share_id: str = PydanticField(alias="shareId")
    share_url: str = PydanticField(alias="shareUrl")
    expires_in: str = PydanticField(alias="expiresIn")


class SharedConversation(SQLModel, table=True):
    id: str = Field(primary_key=True)
    title: str
    messages: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    total_messages: int = 0

    @classmethod
    def from_record(cls, record: SharedRecord) -> "SharedConversation":
        return cls(
            id=record.id,
            title=record.title,
            messages=[m.model_dump(mode="json") for m in record.messages],
            created_at=record.created_at,
            total_messages=record.total_messages,
        )

    def to_record(self) -> SharedRecord:
        created_at = self.created_at
        # sqlite drops tzinfo on the way back out
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return SharedRecord(
            id=self.id,
            title=self.title,
            messages=[SharedMessage.model_validate(m) for m in self.messages],
            created_at=created_at,
            total_messages=self.total_messages,
        )

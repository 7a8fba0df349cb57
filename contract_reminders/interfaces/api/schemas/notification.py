"""Pydantic models describing notification payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from contract_reminders.domain.entities import NotificationRecord

NotificationState = Literal["active", "read", "deleted"]


class NotificationRead(BaseModel):
    """Representation of a notification record delivered to the client."""

    id: str
    category: str
    title: str
    message: str
    entity_id: str | None = None
    priority: str
    created_day_key: str
    read: bool
    viewed: bool
    deleted: bool
    timestamp: str

    @classmethod
    def from_record(cls, record: NotificationRecord) -> "NotificationRead":
        return cls(
            id=record.id,
            category=record.category,
            title=record.title,
            message=record.message,
            entity_id=record.entity_id,
            priority=record.priority,
            created_day_key=record.created_day_key,
            read=record.read,
            viewed=record.viewed,
            deleted=record.deleted,
            timestamp=record.timestamp,
        )


class NotificationSyncResponse(BaseModel):
    """Active notifications of the day plus the toasts to display."""

    day_key: str
    added: int = 0
    unread_count: int = 0
    notifications: list[NotificationRead] = Field(default_factory=list)
    toasts: list[NotificationRead] = Field(default_factory=list)


class UnreadCountResponse(BaseModel):
    day_key: str
    unread_count: int


class BulkUpdateResponse(BaseModel):
    """Number of records touched by a day-scoped bulk action."""

    day_key: str
    updated: int

"""Domain entity representing an in-app notification record."""

from __future__ import annotations

from dataclasses import dataclass, replace

NOTIFICATION_CATEGORY_CREATED = "created"
NOTIFICATION_CATEGORY_EXPIRING_TODAY = "expiring_today"
NOTIFICATION_CATEGORY_EXPIRED = "expired"
NOTIFICATION_CATEGORY_UNASSIGNED_GROUP = "unassigned_group"
NOTIFICATION_CATEGORY_DEADLINE_APPROACHING = "deadline_approaching"

NOTIFICATION_CATEGORIES = (
    NOTIFICATION_CATEGORY_CREATED,
    NOTIFICATION_CATEGORY_EXPIRING_TODAY,
    NOTIFICATION_CATEGORY_EXPIRED,
    NOTIFICATION_CATEGORY_UNASSIGNED_GROUP,
    NOTIFICATION_CATEGORY_DEADLINE_APPROACHING,
)

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"

NOTIFICATION_PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)

# Entity statuses that no longer produce expired notifications.
TERMINAL_STATUSES = ("finalizado", "cancelled", "renewed")

STATE_ACTIVE = "active"
STATE_READ = "read"
STATE_DELETED = "deleted"

NOTIFICATION_STATES = (STATE_ACTIVE, STATE_READ, STATE_DELETED)


def build_notification_id(category: str, entity_id: str | None, created_day_key: str) -> str:
    """Return the deterministic id for ``category`` and ``entity_id`` on a day."""

    if entity_id:
        return f"{category}-{entity_id}-{created_day_key}"
    return f"{category}-{created_day_key}"


@dataclass(frozen=True)
class NotificationRecord:
    """Notification derived for a given day and its lifecycle flags."""

    id: str
    category: str
    title: str
    message: str
    priority: str
    created_day_key: str
    timestamp: str
    entity_id: str | None = None
    read: bool = False
    viewed: bool = False
    deleted: bool = False

    def mark_read(self) -> "NotificationRecord":
        return replace(self, read=True)

    def mark_viewed(self) -> "NotificationRecord":
        # Viewing implies reading.
        return replace(self, read=True, viewed=True)

    def mark_unread(self) -> "NotificationRecord":
        return replace(self, read=False, viewed=False)

    def soft_delete(self) -> "NotificationRecord":
        return replace(self, deleted=True)

    def restore(self) -> "NotificationRecord":
        return replace(self, deleted=False)


__all__ = [
    "NOTIFICATION_CATEGORY_CREATED",
    "NOTIFICATION_CATEGORY_EXPIRING_TODAY",
    "NOTIFICATION_CATEGORY_EXPIRED",
    "NOTIFICATION_CATEGORY_UNASSIGNED_GROUP",
    "NOTIFICATION_CATEGORY_DEADLINE_APPROACHING",
    "NOTIFICATION_CATEGORIES",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_HIGH",
    "NOTIFICATION_PRIORITIES",
    "TERMINAL_STATUSES",
    "STATE_ACTIVE",
    "STATE_READ",
    "STATE_DELETED",
    "NOTIFICATION_STATES",
    "NotificationRecord",
    "build_notification_id",
]

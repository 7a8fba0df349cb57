"""Exceptions raised by the notification lifecycle engine."""

from __future__ import annotations


class DataAccessError(RuntimeError):
    """The record store could not be read; the current tick must abort."""


class RecipientResolutionError(RuntimeError):
    """Recipients for a group could not be loaded."""


class DispatchError(RuntimeError):
    """A single reminder could not be delivered to a single recipient."""


class EmailDeliveryError(DispatchError):
    """The email transport rejected or failed to deliver a message."""


class MalformedRecordError(ValueError):
    """A record carries a date that cannot be parsed."""


class StoreCorruptionError(ValueError):
    """Persisted notification records cannot be decoded."""


class NotificationStoreError(RuntimeError):
    """The notification store could not persist an action."""


class NotificationNotFoundError(LookupError):
    """No notification with the requested id exists in the store."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(f"Notification {notification_id} not found")
        self.notification_id = notification_id


class NotificationStateError(ValueError):
    """The requested transition is not allowed for the notification's state."""


__all__ = [
    "DataAccessError",
    "RecipientResolutionError",
    "DispatchError",
    "EmailDeliveryError",
    "MalformedRecordError",
    "StoreCorruptionError",
    "NotificationStoreError",
    "NotificationNotFoundError",
    "NotificationStateError",
]

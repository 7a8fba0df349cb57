"""In-app notification center: generation, lifecycle and toasts."""

from .generator import ClientNotificationGenerator
from .store import NotificationStore
from .sync import NotificationSyncResult, build_generator, build_store, sync_notifications
from .toasts import ToastTracker

__all__ = [
    "ClientNotificationGenerator",
    "NotificationStore",
    "NotificationSyncResult",
    "ToastTracker",
    "build_generator",
    "build_store",
    "sync_notifications",
]

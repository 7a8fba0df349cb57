"""Pydantic schemas exposed by the HTTP interface."""

from .job import DispatchResultRead, JobRunResponse
from .notification import (
    BulkUpdateResponse,
    NotificationRead,
    NotificationState,
    NotificationSyncResponse,
    UnreadCountResponse,
)

__all__ = [
    "BulkUpdateResponse",
    "DispatchResultRead",
    "JobRunResponse",
    "NotificationRead",
    "NotificationState",
    "NotificationSyncResponse",
    "UnreadCountResponse",
]

"""Repository implementations for infrastructure layer."""

from .entity_repository import ReminderableEntityRepository
from .group_repository import GroupRepository
from .notification_repository import (
    InMemoryNotificationRepository,
    JsonFileNotificationRepository,
    NotificationRepository,
    SqlAlchemyNotificationRepository,
    decode_records,
    encode_records,
)
from .report_settings_repository import (
    InMemoryReportSettingsRepository,
    ReportSettingsRepository,
    SqlAlchemyReportSettingsRepository,
)
from .sent_reminder_repository import (
    InMemorySentReminderLedger,
    SentReminderLedger,
    SqlAlchemySentReminderLedger,
)
from .user_repository import UserRepository

__all__ = [
    "ReminderableEntityRepository",
    "GroupRepository",
    "InMemoryNotificationRepository",
    "JsonFileNotificationRepository",
    "NotificationRepository",
    "SqlAlchemyNotificationRepository",
    "decode_records",
    "encode_records",
    "InMemoryReportSettingsRepository",
    "ReportSettingsRepository",
    "SqlAlchemyReportSettingsRepository",
    "InMemorySentReminderLedger",
    "SentReminderLedger",
    "SqlAlchemySentReminderLedger",
    "UserRepository",
]

"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_CATEGORY_CREATED,
    NOTIFICATION_CATEGORY_DEADLINE_APPROACHING,
    NOTIFICATION_CATEGORY_EXPIRED,
    NOTIFICATION_CATEGORY_EXPIRING_TODAY,
    NOTIFICATION_CATEGORY_UNASSIGNED_GROUP,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_STATES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    STATE_ACTIVE,
    STATE_DELETED,
    STATE_READ,
    TERMINAL_STATUSES,
    NotificationRecord,
    build_notification_id,
)
from .recipient import Recipient, RecipientGroup
from .reminder import (
    DISPATCH_STATUS_FAILED,
    DISPATCH_STATUS_SENT,
    DISPATCH_STATUS_SKIPPED,
    DispatchReport,
    DispatchResult,
    EmailMessage,
    MatchedEntity,
)
from .reminderable_entity import (
    ENTITY_KIND_CONTRACT,
    ENTITY_KIND_PROCESS,
    ReminderableEntity,
)
from .report_settings import (
    EMAIL_FREQUENCY_DAILY,
    EMAIL_FREQUENCY_MONTHLY,
    EMAIL_FREQUENCY_WEEKLY,
    WEEKDAYS,
    UserReportSettings,
)

__all__ = [
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_CATEGORY_CREATED",
    "NOTIFICATION_CATEGORY_DEADLINE_APPROACHING",
    "NOTIFICATION_CATEGORY_EXPIRED",
    "NOTIFICATION_CATEGORY_EXPIRING_TODAY",
    "NOTIFICATION_CATEGORY_UNASSIGNED_GROUP",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_STATES",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "STATE_ACTIVE",
    "STATE_DELETED",
    "STATE_READ",
    "TERMINAL_STATUSES",
    "NotificationRecord",
    "build_notification_id",
    "Recipient",
    "RecipientGroup",
    "DISPATCH_STATUS_FAILED",
    "DISPATCH_STATUS_SENT",
    "DISPATCH_STATUS_SKIPPED",
    "DispatchReport",
    "DispatchResult",
    "EmailMessage",
    "MatchedEntity",
    "ENTITY_KIND_CONTRACT",
    "ENTITY_KIND_PROCESS",
    "ReminderableEntity",
    "EMAIL_FREQUENCY_DAILY",
    "EMAIL_FREQUENCY_MONTHLY",
    "EMAIL_FREQUENCY_WEEKLY",
    "WEEKDAYS",
    "UserReportSettings",
]

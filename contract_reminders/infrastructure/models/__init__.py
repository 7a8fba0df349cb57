"""ORM models used by the application infrastructure."""

from .user import UserModel
from .group import GroupModel, UserGroupModel
from .contract import CONTRACT_STATUS_ACTIVE, ContractModel
from .process import PROCESS_STATUS_FINISHED, ProcessModel
from .notification import NotificationRecordModel
from .sent_reminder import SentReminderModel
from .report_settings import ReportSettingsModel

__all__ = [
    "UserModel",
    "GroupModel",
    "UserGroupModel",
    "CONTRACT_STATUS_ACTIVE",
    "ContractModel",
    "PROCESS_STATUS_FINISHED",
    "ProcessModel",
    "NotificationRecordModel",
    "SentReminderModel",
    "ReportSettingsModel",
]

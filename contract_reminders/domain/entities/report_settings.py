"""Domain entity holding a user's email report preferences."""

from __future__ import annotations

from dataclasses import dataclass

EMAIL_FREQUENCY_DAILY = "daily"
EMAIL_FREQUENCY_WEEKLY = "weekly"
EMAIL_FREQUENCY_MONTHLY = "monthly"

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class UserReportSettings:
    """When and what a user wants to receive as periodic email reports."""

    user_id: str
    email_frequency: str = EMAIL_FREQUENCY_DAILY
    daily_time: str | None = "09:00"
    weekly_day: str | None = "monday"
    weekly_time: str | None = "09:00"
    monthly_day: int | None = 1
    monthly_time: str | None = "09:00"
    report_processes_near_expiry: bool = True
    report_group_processes: bool = True
    report_expiry_days: int = 7


__all__ = [
    "EMAIL_FREQUENCY_DAILY",
    "EMAIL_FREQUENCY_WEEKLY",
    "EMAIL_FREQUENCY_MONTHLY",
    "WEEKDAYS",
    "UserReportSettings",
]

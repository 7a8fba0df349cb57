"""Utility helpers for reusable functionality."""

from .datetime import (
    calendar_date,
    day_key,
    days_until,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_day_key,
    parse_record_date,
    today_in_app_timezone,
)

__all__ = [
    "calendar_date",
    "day_key",
    "days_until",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_day_key",
    "parse_record_date",
    "today_in_app_timezone",
]

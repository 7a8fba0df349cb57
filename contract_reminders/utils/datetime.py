"""Helpers for working with timezone-aware datetimes and calendar days."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from contract_reminders.config import get_settings
from contract_reminders.domain.errors import MalformedRecordError

_DEFAULT_TIMEZONE: Final[str] = "America/Sao_Paulo"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)
_DATE_ONLY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SECONDS_PER_DAY: Final[int] = 24 * 60 * 60


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` class). If the provided value cannot be resolved, the
    default ``America/Sao_Paulo`` timezone is used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def today_in_app_timezone() -> date:
    """Return the current calendar day in the configured timezone."""

    return now_in_app_timezone().date()


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` localized to the app timezone but without ``tzinfo``."""

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def day_key(value: date | datetime) -> str:
    """Return the ``YYYY-MM-DD`` key of the calendar day of ``value``."""

    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_day_key(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` key back into a :class:`date`."""

    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Invalid day key: {value!r}") from exc


def parse_record_date(value: date | datetime | str | None) -> date | datetime | None:
    """Convert a raw record date into a ``date`` or ``datetime``.

    Strings in ``YYYY-MM-DD`` form become dates, any other ISO-8601 string becomes
    a datetime. Empty values return ``None``; anything else that cannot be parsed
    raises :class:`MalformedRecordError`.
    """

    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str):
        raise MalformedRecordError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not text:
        return None
    try:
        if _DATE_ONLY_PATTERN.match(text):
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedRecordError(f"Invalid date value: {value!r}") from exc


def calendar_date(value: date | datetime | str | None) -> date | None:
    """Return the calendar day written in ``value`` without timezone conversion."""

    parsed = parse_record_date(value)
    if isinstance(parsed, datetime):
        return parsed.date()
    return parsed


def days_until(target: date | datetime, reference: date | datetime) -> int:
    """Return ``ceil((target - reference) / 1 day)``; negative when already past."""

    target_at = _as_datetime(target)
    reference_at = _as_datetime(reference)
    if (target_at.tzinfo is None) != (reference_at.tzinfo is None):
        target_at = ensure_app_timezone(target_at)
        reference_at = ensure_app_timezone(reference_at)
    delta = target_at - reference_at
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return ZoneInfo(_DEFAULT_TIMEZONE)

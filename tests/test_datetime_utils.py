"""Tests for the date helpers shared by both reminder halves."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from contract_reminders.domain.errors import MalformedRecordError
from contract_reminders.utils import (
    calendar_date,
    day_key,
    days_until,
    parse_day_key,
    parse_record_date,
)


def test_parse_record_date_distinguishes_dates_and_datetimes() -> None:
    assert parse_record_date("2024-03-15") == date(2024, 3, 15)
    assert parse_record_date("2024-03-15T10:00:00Z") == datetime(2024, 3, 15, 10, tzinfo=timezone.utc)
    assert parse_record_date("  ") is None
    assert parse_record_date(None) is None


@pytest.mark.parametrize("value", ["15/03/2024", "tomorrow", 20240315])
def test_parse_record_date_rejects_malformed_values(value) -> None:
    with pytest.raises(MalformedRecordError):
        parse_record_date(value)


def test_calendar_date_keeps_written_day() -> None:
    assert calendar_date("2024-03-15T23:30:00-03:00") == date(2024, 3, 15)


def test_days_until_rounds_up_partial_days() -> None:
    assert days_until(date(2024, 3, 16), date(2024, 3, 15)) == 1
    assert days_until(date(2024, 3, 16), datetime(2024, 3, 15, 23, 0)) == 1
    assert days_until(date(2024, 3, 12), date(2024, 3, 15)) == -3


def test_day_keys_round_trip() -> None:
    assert day_key(datetime(2024, 3, 15, 22, 0)) == "2024-03-15"
    assert parse_day_key("2024-03-15") == date(2024, 3, 15)
    with pytest.raises(MalformedRecordError):
        parse_day_key("15-03-2024")

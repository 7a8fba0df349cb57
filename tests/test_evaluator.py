"""Tests for the reminder evaluator and its match strategies."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from conftest import make_contract, make_process
from contract_reminders.application.use_cases.reminders import (
    AbsoluteValueMatch,
    FutureOnlyMatch,
    ReminderEvaluator,
)


@pytest.mark.parametrize("offset", [1, 7, 15, 30])
def test_process_flagged_exactly_on_notification_day(today: date, offset: int) -> None:
    evaluator = ReminderEvaluator(AbsoluteValueMatch(), [1, 7, 15, 30])
    entity = make_process(end_date=today + timedelta(days=offset))

    matched = evaluator.evaluate(today, [entity])

    assert len(matched) == 1
    assert matched[0].days_until_target == offset
    assert matched[0].entity is entity


@pytest.mark.parametrize("offset", [0, 2, 6, 8, 29, 31])
def test_process_not_flagged_on_other_days(today: date, offset: int) -> None:
    evaluator = ReminderEvaluator(AbsoluteValueMatch(), [1, 7, 15, 30])
    entity = make_process(end_date=today + timedelta(days=offset))

    assert evaluator.evaluate(today, [entity]) == []


def test_absolute_value_matches_overdue_processes(today: date) -> None:
    evaluator = ReminderEvaluator(AbsoluteValueMatch(), [7])
    entity = make_process(end_date=today - timedelta(days=7))

    matched = evaluator.evaluate(today, [entity])

    assert [item.days_until_target for item in matched] == [-7]


def test_future_only_ignores_overdue_contracts(today: date) -> None:
    evaluator = ReminderEvaluator(FutureOnlyMatch(), [1])
    overdue = make_contract("C1", end_date=today - timedelta(days=1))
    upcoming = make_contract("C2", end_date=today + timedelta(days=1))

    matched = evaluator.evaluate(today, [overdue, upcoming])

    assert [item.entity.id for item in matched] == ["C2"]


def test_explicit_notification_days_override_defaults(today: date) -> None:
    evaluator = ReminderEvaluator(FutureOnlyMatch(), [1])
    custom = make_contract("C1", end_date=today + timedelta(days=10), notification_days=(10,))
    silenced = make_contract("C2", end_date=today + timedelta(days=1), notification_days=())

    matched = evaluator.evaluate(today, [custom, silenced])

    assert [item.entity.id for item in matched] == ["C1"]


def test_opening_date_used_when_end_date_missing(today: date) -> None:
    evaluator = ReminderEvaluator(AbsoluteValueMatch(), [15])
    entity = make_process(end_date=None, opening_date=(today - timedelta(days=15)).isoformat())

    matched = evaluator.evaluate(today, [entity])

    assert len(matched) == 1
    assert matched[0].target_date == today - timedelta(days=15)


def test_entities_without_dates_are_skipped(today: date) -> None:
    evaluator = ReminderEvaluator(AbsoluteValueMatch(), [1])

    assert evaluator.evaluate(today, [make_process(end_date=None, opening_date=None)]) == []


def test_malformed_dates_are_logged_and_skipped(today: date, caplog) -> None:
    evaluator = ReminderEvaluator(AbsoluteValueMatch(), [1])
    broken = make_process("P1", end_date="31/12/2024")
    valid = make_process("P2", end_date=today + timedelta(days=1))

    with caplog.at_level("WARNING"):
        matched = evaluator.evaluate(today, [broken, valid])

    assert [item.entity.id for item in matched] == ["P2"]
    assert "malformed target date" in caplog.text


def test_fractional_days_are_rounded_up() -> None:
    evaluator = ReminderEvaluator(FutureOnlyMatch(), [1])
    now = datetime(2024, 3, 15, 9, 0)
    entity = make_contract(end_date=date(2024, 3, 16))

    matched = evaluator.evaluate(now, [entity])

    assert [item.days_until_target for item in matched] == [1]

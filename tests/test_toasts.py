"""Tests for toast emission and notification sync."""

from __future__ import annotations

from datetime import datetime, timedelta

from conftest import make_process
from contract_reminders.application.use_cases.notifications import (
    ClientNotificationGenerator,
    NotificationStore,
    ToastTracker,
    sync_notifications,
)
from contract_reminders.domain.entities import PRIORITY_LOW, NotificationRecord
from contract_reminders.infrastructure.repositories import InMemoryNotificationRepository

NOW = datetime(2024, 3, 15, 9, 0)


def _sync(store: NotificationStore, tracker: ToastTracker, entities, now: datetime = NOW):
    return sync_notifications(store, ClientNotificationGenerator(), tracker, entities=entities, now=now)


def test_expiring_today_toasts_once_until_viewed() -> None:
    store = NotificationStore(InMemoryNotificationRepository())
    tracker = ToastTracker()
    entities = [make_process("P1", end_date="2024-03-15")]

    first = _sync(store, tracker, entities)
    assert [record.id for record in first.records] == ["expiring_today-P1-2024-03-15"]
    assert [toast.id for toast in first.toasts] == ["expiring_today-P1-2024-03-15"]
    assert first.unread_count == 1

    rerender = _sync(store, tracker, entities, NOW.replace(minute=5))
    assert rerender.toasts == []

    store.mark_as_viewed("expiring_today-P1-2024-03-15")
    after_view = _sync(store, ToastTracker(), entities, NOW.replace(minute=10))
    assert after_view.toasts == []
    assert after_view.unread_count == 0


def test_day_change_clears_tracker() -> None:
    tracker = ToastTracker()
    record = NotificationRecord(
        id="expired-P1-2024-03-15",
        category="expired",
        title="Processo Vencido",
        message="O processo P1 venceu",
        priority="high",
        created_day_key="2024-03-15",
        timestamp="2024-03-15T09:00:00",
    )

    assert tracker.collect("2024-03-15", [record]) == [record]
    assert tracker.collect("2024-03-15", [record]) == []
    assert tracker.collect("2024-03-16", [record]) == [record]


def test_only_high_priority_unviewed_records_toast() -> None:
    tracker = ToastTracker()
    base = dict(
        category="expired",
        title="t",
        message="m",
        created_day_key="2024-03-15",
        timestamp="2024-03-15T09:00:00",
    )
    records = [
        NotificationRecord(id="low", priority=PRIORITY_LOW, **base),
        NotificationRecord(id="viewed", priority="high", read=True, viewed=True, **base),
        NotificationRecord(id="deleted", priority="high", deleted=True, **base),
        NotificationRecord(id="fresh", priority="high", **base),
    ]

    assert [toast.id for toast in tracker.collect("2024-03-15", records)] == ["fresh"]


def test_tracker_is_bounded() -> None:
    tracker = ToastTracker(max_entries=2)
    base = dict(
        category="expired",
        title="t",
        message="m",
        priority="high",
        created_day_key="2024-03-15",
        timestamp="2024-03-15T09:00:00",
    )
    records = [NotificationRecord(id=f"n{index}", **base) for index in range(3)]

    tracker.collect("2024-03-15", records)

    assert len(tracker) == 2
    assert "n0" not in tracker


def test_sync_purges_expired_records_before_generating() -> None:
    old = NotificationRecord(
        id="expired-P9-2024-03-01",
        category="expired",
        title="Processo Vencido",
        message="O processo P9 venceu",
        priority="high",
        created_day_key="2024-03-01",
        timestamp="2024-03-01T09:00:00",
    )
    repository = InMemoryNotificationRepository([old])
    store = NotificationStore(repository)

    result = _sync(store, ToastTracker(), [], NOW + timedelta(days=1))

    assert result.records == []
    assert repository.load() == []

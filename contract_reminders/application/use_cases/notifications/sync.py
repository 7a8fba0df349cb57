"""Refresh the notification center of a user from the current records."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from contract_reminders.config import Settings, get_settings
from contract_reminders.domain.entities import STATE_ACTIVE, NotificationRecord, ReminderableEntity
from contract_reminders.infrastructure.repositories import NotificationRepository
from contract_reminders.utils import day_key

from .generator import ClientNotificationGenerator
from .store import NotificationStore
from .toasts import ToastTracker

logger = logging.getLogger(__name__)


@dataclass
class NotificationSyncResult:
    """Snapshot returned to the notification center after a sync."""

    day_key: str
    records: list[NotificationRecord] = field(default_factory=list)
    toasts: list[NotificationRecord] = field(default_factory=list)
    added: int = 0
    unread_count: int = 0


def build_generator(settings: Settings | None = None) -> ClientNotificationGenerator:
    settings = settings or get_settings()
    return ClientNotificationGenerator(
        terminal_statuses=settings.terminal_statuses,
        recent_window=timedelta(hours=settings.recent_window_hours),
    )


def build_store(repository: NotificationRepository, settings: Settings | None = None) -> NotificationStore:
    settings = settings or get_settings()
    return NotificationStore(
        repository,
        active_retention_days=settings.active_retention_days,
        deleted_retention_days=settings.deleted_retention_days,
    )


def sync_notifications(
    store: NotificationStore,
    generator: ClientNotificationGenerator,
    tracker: ToastTracker,
    *,
    entities: Sequence[ReminderableEntity],
    now: datetime,
) -> NotificationSyncResult:
    """Purge, regenerate and read back the notifications of ``now``'s day.

    Candidates deleted earlier on the same day are filtered out through the
    store's tombstones before they reach the store.
    """

    today = now.date()
    store.purge_expired(today)
    tombstones = store.tombstones(today)
    candidates = generator.generate(now, entities, tombstones)
    added = store.add_candidates(today, candidates)
    if added:
        logger.info("Added %s notifications for %s", len(added), day_key(today))

    records = store.list_by_state(today, STATE_ACTIVE)
    return NotificationSyncResult(
        day_key=day_key(today),
        records=records,
        toasts=tracker.collect(today, records),
        added=len(added),
        unread_count=sum(1 for record in records if not record.read),
    )


__all__ = [
    "NotificationSyncResult",
    "build_generator",
    "build_store",
    "sync_notifications",
]

"""Lifecycle of the in-app notification records of one user."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime

from contract_reminders.domain.entities import (
    STATE_ACTIVE,
    STATE_DELETED,
    STATE_READ,
    NotificationRecord,
)
from contract_reminders.domain.errors import (
    MalformedRecordError,
    NotificationNotFoundError,
    NotificationStateError,
)
from contract_reminders.infrastructure.repositories import NotificationRepository
from contract_reminders.utils import day_key, parse_day_key

logger = logging.getLogger(__name__)

DayLike = date | datetime | str


def _as_date(day: DayLike) -> date:
    if isinstance(day, str):
        return parse_day_key(day)
    if isinstance(day, datetime):
        return day.date()
    return day


class NotificationStore:
    """Apply user actions and retention to the records kept by a repository.

    Every action loads the persisted records, computes the new list without
    mutating anything and saves it. When ``save`` fails the repository raises
    ``NotificationStoreError`` and the previously persisted records stay as
    they were.
    """

    def __init__(
        self,
        repository: NotificationRepository,
        *,
        active_retention_days: int = 7,
        deleted_retention_days: int = 1,
    ) -> None:
        self.repository = repository
        self.active_retention_days = active_retention_days
        self.deleted_retention_days = deleted_retention_days

    # Retention -------------------------------------------------------------

    def _is_retained(self, record: NotificationRecord, today: date) -> bool:
        try:
            created = parse_day_key(record.created_day_key)
        except MalformedRecordError:
            logger.warning("Dropping notification %s with malformed day key", record.id)
            return False
        age = (today - created).days
        limit = self.deleted_retention_days if record.deleted else self.active_retention_days
        return age <= limit

    def _visible(self, records: Iterable[NotificationRecord], today: date) -> list[NotificationRecord]:
        visible = [
            record
            for record in records
            if self._is_retained(record, today) and record.created_day_key <= day_key(today)
        ]
        visible.sort(key=lambda record: (record.created_day_key, record.timestamp), reverse=True)
        return visible

    def purge_expired(self, day: DayLike) -> int:
        """Permanently remove records past their retention window."""

        today = _as_date(day)
        records = self.repository.load()
        kept = [record for record in records if self._is_retained(record, today)]
        purged = len(records) - len(kept)
        if purged:
            self.repository.save(kept)
            logger.info("Purged %s expired notifications on %s", purged, day_key(today))
        return purged

    # Generation ------------------------------------------------------------

    def tombstones(self, day: DayLike) -> set[str]:
        """Ids deleted on ``day``; candidates with these ids are not regenerated."""

        key = day_key(_as_date(day))
        return {
            record.id
            for record in self.repository.load()
            if record.deleted and record.created_day_key == key
        }

    def add_candidates(self, day: DayLike, candidates: Iterable[NotificationRecord]) -> list[NotificationRecord]:
        """Insert the candidates whose ids are not stored yet and return them.

        Existing records keep their flags, so a same-day tombstone is never
        replaced by a fresh candidate.
        """

        key = day_key(_as_date(day))
        records = self.repository.load()
        known = {record.id for record in records}
        added = []
        for candidate in candidates:
            if candidate.id in known:
                continue
            if candidate.created_day_key != key:
                logger.warning(
                    "Ignoring notification %s generated for %s while syncing %s",
                    candidate.id,
                    candidate.created_day_key,
                    key,
                )
                continue
            known.add(candidate.id)
            added.append(candidate)
        if added:
            self.repository.save(records + added)
        return added

    # Single record actions -------------------------------------------------

    def _update(
        self,
        notification_id: str,
        transition: Callable[[NotificationRecord], NotificationRecord],
    ) -> NotificationRecord:
        records = self.repository.load()
        for index, record in enumerate(records):
            if record.id == notification_id:
                break
        else:
            raise NotificationNotFoundError(notification_id)

        updated = transition(record)
        if updated != record:
            self.repository.save(records[:index] + [updated] + records[index + 1 :])
        return updated

    @staticmethod
    def _require_not_deleted(record: NotificationRecord) -> None:
        if record.deleted:
            raise NotificationStateError(f"Notification {record.id} is deleted")

    def mark_as_read(self, notification_id: str) -> NotificationRecord:
        def transition(record: NotificationRecord) -> NotificationRecord:
            self._require_not_deleted(record)
            return record.mark_read()

        return self._update(notification_id, transition)

    def mark_as_viewed(self, notification_id: str) -> NotificationRecord:
        def transition(record: NotificationRecord) -> NotificationRecord:
            self._require_not_deleted(record)
            return record.mark_viewed()

        return self._update(notification_id, transition)

    def mark_as_unread(self, notification_id: str) -> NotificationRecord:
        def transition(record: NotificationRecord) -> NotificationRecord:
            self._require_not_deleted(record)
            return record.mark_unread()

        return self._update(notification_id, transition)

    def delete(self, notification_id: str) -> NotificationRecord:
        return self._update(notification_id, NotificationRecord.soft_delete)

    def restore(self, notification_id: str) -> NotificationRecord:
        return self._update(notification_id, NotificationRecord.restore)

    # Bulk actions ----------------------------------------------------------

    def _update_day(
        self, day: DayLike, transition: Callable[[NotificationRecord], NotificationRecord]
    ) -> int:
        key = day_key(_as_date(day))
        records = self.repository.load()
        updated = [
            transition(record) if record.created_day_key == key and not record.deleted else record
            for record in records
        ]
        changed = sum(1 for before, after in zip(records, updated) if before != after)
        if changed:
            self.repository.save(updated)
        return changed

    def mark_all_read(self, day: DayLike) -> int:
        """Mark the active records generated on ``day`` as read."""

        return self._update_day(day, NotificationRecord.mark_read)

    def mark_all_viewed(self, day: DayLike) -> int:
        """Mark the active records generated on ``day`` as viewed."""

        return self._update_day(day, NotificationRecord.mark_viewed)

    # Read model ------------------------------------------------------------

    def list_by_state(self, day: DayLike, state: str) -> list[NotificationRecord]:
        visible = self._visible(self.repository.load(), _as_date(day))
        if state == STATE_ACTIVE:
            return [record for record in visible if not record.deleted]
        if state == STATE_READ:
            return [record for record in visible if record.read and not record.deleted]
        if state == STATE_DELETED:
            return [record for record in visible if record.deleted]
        raise ValueError(f"Unknown notification state: {state}")

    def unread_count(self, day: DayLike) -> int:
        return sum(1 for record in self.list_by_state(day, STATE_ACTIVE) if not record.read)


__all__ = ["NotificationStore"]

"""Derive the notification candidates of a day from a snapshot of records."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence
from datetime import date, datetime, timedelta

from contract_reminders.domain.entities import (
    ENTITY_KIND_CONTRACT,
    NOTIFICATION_CATEGORY_CREATED,
    NOTIFICATION_CATEGORY_EXPIRED,
    NOTIFICATION_CATEGORY_EXPIRING_TODAY,
    NOTIFICATION_CATEGORY_UNASSIGNED_GROUP,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    TERMINAL_STATUSES,
    NotificationRecord,
    ReminderableEntity,
    build_notification_id,
)
from contract_reminders.domain.errors import MalformedRecordError
from contract_reminders.utils import calendar_date, day_key, ensure_app_timezone, parse_record_date

logger = logging.getLogger(__name__)

_KIND_LABELS = {ENTITY_KIND_CONTRACT: "contrato"}
_DEFAULT_LABEL = "processo"


def _label(entity: ReminderableEntity) -> str:
    return _KIND_LABELS.get(entity.kind, _DEFAULT_LABEL)


class ClientNotificationGenerator:
    """Apply the expired, expiring-today, unassigned and recently-created rules."""

    def __init__(
        self,
        *,
        terminal_statuses: Collection[str] = TERMINAL_STATUSES,
        recent_window: timedelta = timedelta(hours=24),
    ) -> None:
        self.terminal_statuses = frozenset(status.lower() for status in terminal_statuses)
        self.recent_window = recent_window

    def generate(
        self,
        now: datetime,
        entities: Sequence[ReminderableEntity],
        tombstones: Collection[str] = frozenset(),
    ) -> list[NotificationRecord]:
        today = now.date()
        key = day_key(today)
        timestamp = now.isoformat()

        candidates: list[NotificationRecord] = []
        for entity, end in self._end_dates(entities):
            if end < today and not self._is_terminal(entity):
                candidates.append(self._expired(entity, end, key, timestamp))
            elif end == today:
                candidates.append(self._expiring_today(entity, key, timestamp))

        unassigned = [entity for entity in entities if not entity.has_group]
        if unassigned:
            candidates.append(self._unassigned(len(unassigned), key, timestamp))

        candidates.extend(
            self._created(entity, created, key)
            for entity, created in self._recently_created(entities, now)
        )

        kept = [candidate for candidate in candidates if candidate.id not in tombstones]
        if len(kept) != len(candidates):
            logger.debug("Dropped %s deleted notifications for %s", len(candidates) - len(kept), key)
        return kept

    def _is_terminal(self, entity: ReminderableEntity) -> bool:
        return (entity.status or "").lower() in self.terminal_statuses

    @staticmethod
    def _end_dates(entities: Iterable[ReminderableEntity]) -> Iterable[tuple[ReminderableEntity, date]]:
        for entity in entities:
            try:
                end = calendar_date(entity.end_date)
            except MalformedRecordError:
                logger.warning("Skipping %s %s: malformed end date", entity.kind, entity.id)
                continue
            if end is not None:
                yield entity, end

    def _recently_created(
        self, entities: Iterable[ReminderableEntity], now: datetime
    ) -> Iterable[tuple[ReminderableEntity, datetime]]:
        for entity in entities:
            try:
                created = parse_record_date(entity.created_at)
            except MalformedRecordError:
                logger.warning("Skipping %s %s: malformed creation date", entity.kind, entity.id)
                continue
            if created is None:
                continue
            if not isinstance(created, datetime):
                created = datetime(created.year, created.month, created.day)
            reference = now
            if (created.tzinfo is None) != (reference.tzinfo is None):
                created = ensure_app_timezone(created)
                reference = ensure_app_timezone(reference)
            if reference - created <= self.recent_window:
                yield entity, created

    @staticmethod
    def _expired(entity: ReminderableEntity, end: date, key: str, timestamp: str) -> NotificationRecord:
        label = _label(entity)
        return NotificationRecord(
            id=build_notification_id(NOTIFICATION_CATEGORY_EXPIRED, entity.id, key),
            category=NOTIFICATION_CATEGORY_EXPIRED,
            title=f"{label.capitalize()} Vencido",
            message=f"O {label} {entity.number} venceu em {end.strftime('%d/%m/%Y')}",
            entity_id=entity.id,
            priority=PRIORITY_HIGH,
            created_day_key=key,
            timestamp=timestamp,
        )

    @staticmethod
    def _expiring_today(entity: ReminderableEntity, key: str, timestamp: str) -> NotificationRecord:
        label = _label(entity)
        return NotificationRecord(
            id=build_notification_id(NOTIFICATION_CATEGORY_EXPIRING_TODAY, entity.id, key),
            category=NOTIFICATION_CATEGORY_EXPIRING_TODAY,
            title=f"{label.capitalize()} Vencendo Hoje",
            message=f"O {label} {entity.number} vence hoje",
            entity_id=entity.id,
            priority=PRIORITY_HIGH,
            created_day_key=key,
            timestamp=timestamp,
        )

    @staticmethod
    def _unassigned(count: int, key: str, timestamp: str) -> NotificationRecord:
        return NotificationRecord(
            id=build_notification_id(NOTIFICATION_CATEGORY_UNASSIGNED_GROUP, None, key),
            category=NOTIFICATION_CATEGORY_UNASSIGNED_GROUP,
            title="Processos Sem Responsável",
            message=f"{count} processo(s) sem grupo responsável",
            priority=PRIORITY_MEDIUM,
            created_day_key=key,
            timestamp=timestamp,
        )

    @staticmethod
    def _created(entity: ReminderableEntity, created: datetime, key: str) -> NotificationRecord:
        label = _label(entity)
        return NotificationRecord(
            id=build_notification_id(NOTIFICATION_CATEGORY_CREATED, entity.id, key),
            category=NOTIFICATION_CATEGORY_CREATED,
            title=f"Novo {label.capitalize()} Criado",
            message=f"{label.capitalize()} {entity.number} foi criado",
            entity_id=entity.id,
            priority=PRIORITY_LOW,
            created_day_key=key,
            timestamp=created.isoformat(),
        )


__all__ = ["ClientNotificationGenerator"]

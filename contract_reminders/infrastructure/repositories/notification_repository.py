"""Persistence helpers for notification records.

Every repository exposes the same two operations, ``load`` and ``save``, so the
notification store can be backed by memory, a JSON file or the database
without any change to its state machine.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Literal, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_reminders.domain.entities import NotificationRecord
from contract_reminders.domain.errors import NotificationStoreError, StoreCorruptionError
from contract_reminders.infrastructure.models import NotificationRecordModel

logger = logging.getLogger(__name__)


class NotificationRepository(Protocol):
    """Storage medium for the notification store."""

    def load(self) -> list[NotificationRecord]:
        ...

    def save(self, records: Sequence[NotificationRecord]) -> None:
        ...


class StoredNotification(BaseModel):
    """Serialized shape of a notification record."""

    id: str
    category: Literal[
        "created",
        "expiring_today",
        "expired",
        "unassigned_group",
        "deadline_approaching",
    ]
    title: str
    message: str
    entity_id: str | None = None
    priority: Literal["low", "medium", "high"]
    created_day_key: str
    read: bool = False
    viewed: bool = False
    deleted: bool = False
    timestamp: str

    @classmethod
    def from_record(cls, record: NotificationRecord) -> "StoredNotification":
        return cls(
            id=record.id,
            category=record.category,
            title=record.title,
            message=record.message,
            entity_id=record.entity_id,
            priority=record.priority,
            created_day_key=record.created_day_key,
            read=record.read,
            viewed=record.viewed,
            deleted=record.deleted,
            timestamp=record.timestamp,
        )

    def to_record(self) -> NotificationRecord:
        return NotificationRecord(**self.model_dump())


_RECORDS_ADAPTER = TypeAdapter(list[StoredNotification])


def encode_records(records: Sequence[NotificationRecord]) -> str:
    """Serialize ``records`` as a flat JSON list."""

    payload = [StoredNotification.from_record(record) for record in records]
    return _RECORDS_ADAPTER.dump_json(payload, indent=2).decode("utf-8")


def decode_records(raw: str | bytes) -> list[NotificationRecord]:
    """Parse a JSON list produced by :func:`encode_records`."""

    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        payload = _RECORDS_ADAPTER.validate_json(raw)
    except (UnicodeDecodeError, ValidationError) as exc:
        raise StoreCorruptionError(f"Invalid notification payload: {exc}") from exc
    return [item.to_record() for item in payload]


class InMemoryNotificationRepository:
    """Keep notification records in process memory."""

    def __init__(self, records: Sequence[NotificationRecord] | None = None) -> None:
        self._records: tuple[NotificationRecord, ...] = tuple(records or ())

    def load(self) -> list[NotificationRecord]:
        return list(self._records)

    def save(self, records: Sequence[NotificationRecord]) -> None:
        self._records = tuple(records)


class JsonFileNotificationRepository:
    """Store notification records as a JSON list in a file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[NotificationRecord]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise NotificationStoreError(f"Unable to read {self.path}") from exc
        if not raw.strip():
            return []
        try:
            return decode_records(raw)
        except StoreCorruptionError:
            logger.warning(
                "Notification store at %s is corrupted; starting from an empty store",
                self.path,
                exc_info=True,
            )
            return []

    def save(self, records: Sequence[NotificationRecord]) -> None:
        content = encode_records(records)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(dir=directory, prefix=".notifications-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(content)
                os.replace(temp_name, self.path)
            except OSError:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise NotificationStoreError(f"Unable to write {self.path}") from exc


class SqlAlchemyNotificationRepository:
    """Store the notification records of one owner in the database."""

    def __init__(self, session: Session, owner_id: str) -> None:
        self.session = session
        self.owner_id = owner_id

    def load(self) -> list[NotificationRecord]:
        try:
            models = (
                self.session.query(NotificationRecordModel)
                .filter(NotificationRecordModel.owner_id == self.owner_id)
                .order_by(NotificationRecordModel.timestamp.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise NotificationStoreError("Unable to load notifications") from exc
        return [self._to_entity(model) for model in models]

    def save(self, records: Sequence[NotificationRecord]) -> None:
        try:
            existing = {
                model.id: model
                for model in self.session.query(NotificationRecordModel)
                .filter(NotificationRecordModel.owner_id == self.owner_id)
                .all()
            }
            for record in records:
                model = existing.pop(record.id, None)
                if model is None:
                    model = NotificationRecordModel(owner_id=self.owner_id)
                self._apply_entity_to_model(model, record)
                self.session.add(model)
            for stale in existing.values():
                self.session.delete(stale)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise NotificationStoreError("Unable to save notifications") from exc

    @staticmethod
    def _apply_entity_to_model(model: NotificationRecordModel, record: NotificationRecord) -> None:
        model.id = record.id
        model.category = record.category
        model.title = record.title
        model.message = record.message
        model.entity_id = record.entity_id
        model.priority = record.priority
        model.created_day_key = record.created_day_key
        model.read = record.read
        model.viewed = record.viewed
        model.deleted = record.deleted
        model.timestamp = record.timestamp

    @staticmethod
    def _to_entity(model: NotificationRecordModel) -> NotificationRecord:
        return NotificationRecord(
            id=model.id,
            category=model.category,
            title=model.title,
            message=model.message,
            entity_id=model.entity_id,
            priority=model.priority,
            created_day_key=model.created_day_key,
            read=bool(model.read),
            viewed=bool(model.viewed),
            deleted=bool(model.deleted),
            timestamp=model.timestamp,
        )


__all__ = [
    "NotificationRepository",
    "StoredNotification",
    "encode_records",
    "decode_records",
    "InMemoryNotificationRepository",
    "JsonFileNotificationRepository",
    "SqlAlchemyNotificationRepository",
]

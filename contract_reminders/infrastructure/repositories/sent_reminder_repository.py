"""Ledgers remembering which reminders were already sent on a given day."""

from __future__ import annotations

import threading
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from contract_reminders.domain.errors import DataAccessError
from contract_reminders.infrastructure.models import SentReminderModel


class SentReminderLedger(Protocol):
    """Claim-based dedup set keyed by ``(entity_key, recipient_id, day_key)``."""

    def claim(self, entity_key: str, recipient_id: str, day_key: str) -> bool:
        """Return ``True`` when the caller now owns the send, ``False`` if already claimed."""

    def release(self, entity_key: str, recipient_id: str, day_key: str) -> None:
        """Forget a claim so a later tick may retry the send."""


class InMemorySentReminderLedger:
    """Process-local ledger, safe for concurrent ticks in one process."""

    def __init__(self) -> None:
        self._claimed: set[tuple[str, str, str]] = set()
        self._lock = threading.Lock()

    def claim(self, entity_key: str, recipient_id: str, day_key: str) -> bool:
        key = (entity_key, recipient_id, day_key)
        with self._lock:
            if key in self._claimed:
                return False
            self._claimed.add(key)
            return True

    def release(self, entity_key: str, recipient_id: str, day_key: str) -> None:
        with self._lock:
            self._claimed.discard((entity_key, recipient_id, day_key))

    def __len__(self) -> int:
        return len(self._claimed)


class SqlAlchemySentReminderLedger:
    """Database ledger; the unique constraint arbitrates concurrent claims."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def claim(self, entity_key: str, recipient_id: str, day_key: str) -> bool:
        model = SentReminderModel(
            entity_key=entity_key, recipient_id=recipient_id, day_key=day_key
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Unable to record the reminder claim") from exc
        return True

    def release(self, entity_key: str, recipient_id: str, day_key: str) -> None:
        try:
            self.session.query(SentReminderModel).filter(
                SentReminderModel.entity_key == entity_key,
                SentReminderModel.recipient_id == recipient_id,
                SentReminderModel.day_key == day_key,
            ).delete(synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Unable to release the reminder claim") from exc


__all__ = [
    "SentReminderLedger",
    "InMemorySentReminderLedger",
    "SqlAlchemySentReminderLedger",
]

"""Read-only access to contracts and processes as reminderable entities."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_reminders.domain.entities import (
    ENTITY_KIND_CONTRACT,
    ENTITY_KIND_PROCESS,
    ReminderableEntity,
)
from contract_reminders.domain.errors import DataAccessError, MalformedRecordError
from contract_reminders.infrastructure.models import (
    CONTRACT_STATUS_ACTIVE,
    PROCESS_STATUS_FINISHED,
    ContractModel,
    ProcessModel,
)

logger = logging.getLogger(__name__)


class ReminderableEntityRepository:
    """Load contracts and processes from the record store.

    Any database failure is reported as :class:`DataAccessError`; the record
    store is never written to.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active_contracts(self) -> Sequence[ReminderableEntity]:
        query = self.session.query(ContractModel).filter(
            ContractModel.status == CONTRACT_STATUS_ACTIVE
        )
        return self._entities(self._all(query, "contracts"), self._contract_to_entity)

    def list_open_group_processes(self) -> Sequence[ReminderableEntity]:
        query = (
            self.session.query(ProcessModel)
            .filter(ProcessModel.group_id.isnot(None))
            .filter(ProcessModel.status != PROCESS_STATUS_FINISHED)
        )
        return self._entities(self._all(query, "processes"), self._process_to_entity)

    def list_pending_processes_for_group(self, group_id: str) -> Sequence[ReminderableEntity]:
        query = (
            self.session.query(ProcessModel)
            .filter(ProcessModel.group_id == group_id)
            .filter(ProcessModel.status != PROCESS_STATUS_FINISHED)
            .order_by(ProcessModel.created_at.desc())
        )
        return self._entities(self._all(query, "processes"), self._process_to_entity)

    def list_processes_ending_between(self, start: date, end: date) -> Sequence[ReminderableEntity]:
        query = (
            self.session.query(ProcessModel)
            .filter(ProcessModel.end_date.isnot(None))
            .filter(ProcessModel.end_date >= start)
            .filter(ProcessModel.end_date <= end)
            .order_by(ProcessModel.end_date.asc())
        )
        return self._entities(self._all(query, "processes"), self._process_to_entity)

    def list_processes(self) -> Sequence[ReminderableEntity]:
        """Return every process, the snapshot watched by the notification center."""

        query = self.session.query(ProcessModel).order_by(ProcessModel.created_at.desc())
        return self._entities(self._all(query, "processes"), self._process_to_entity)

    @staticmethod
    def _all(query, label: str) -> list:
        try:
            return query.all()
        except SQLAlchemyError as exc:
            raise DataAccessError(f"Unable to load {label} from the record store") from exc

    @staticmethod
    def _entities(models: Iterable, mapper: Callable) -> list[ReminderableEntity]:
        entities: list[ReminderableEntity] = []
        for model in models:
            try:
                entities.append(mapper(model))
            except MalformedRecordError as exc:
                logger.warning("Skipping record %s: %s", getattr(model, "id", None), exc)
        return entities

    @staticmethod
    def _notification_days(raw) -> tuple[int, ...] | None:
        if raw is None:
            return None
        if not isinstance(raw, (list, tuple)):
            raise MalformedRecordError(f"notification_days must be a list, got {raw!r}")
        try:
            return tuple(int(value) for value in raw)
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError(f"Invalid notification_days {raw!r}") from exc

    @classmethod
    def _contract_to_entity(cls, model: ContractModel) -> ReminderableEntity:
        return ReminderableEntity(
            id=model.id,
            title=model.title,
            number=model.contract_number,
            kind=ENTITY_KIND_CONTRACT,
            status=model.status,
            end_date=model.end_date,
            opening_date=None,
            created_at=model.created_at,
            notification_days=cls._notification_days(model.notification_days),
            recipient_group_id=model.group_id,
            owner_id=model.created_by,
        )

    @classmethod
    def _process_to_entity(cls, model: ProcessModel) -> ReminderableEntity:
        return ReminderableEntity(
            id=model.id,
            title=model.title,
            number=model.process_number,
            kind=ENTITY_KIND_PROCESS,
            status=model.status,
            end_date=model.end_date,
            opening_date=model.opening_date,
            created_at=model.created_at,
            notification_days=cls._notification_days(model.notification_days),
            recipient_group_id=model.group_id,
        )


__all__ = ["ReminderableEntityRepository"]

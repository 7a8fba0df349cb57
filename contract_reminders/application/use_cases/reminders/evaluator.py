"""Decide which dated records cross a reminder boundary on a given day."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from contract_reminders.domain.entities import MatchedEntity, ReminderableEntity
from contract_reminders.domain.errors import MalformedRecordError
from contract_reminders.utils import days_until

logger = logging.getLogger(__name__)


class MatchStrategy(Protocol):
    """Policy deciding whether ``days_until_target`` is a notification day."""

    name: str

    def matches(self, days_until_target: int, notification_days: Collection[int]) -> bool:
        ...


@dataclass(frozen=True)
class FutureOnlyMatch:
    """Match only the exact (signed) number of days before the target."""

    name: str = "future_only"

    def matches(self, days_until_target: int, notification_days: Collection[int]) -> bool:
        return days_until_target in notification_days


@dataclass(frozen=True)
class AbsoluteValueMatch:
    """Match N days before and N days after the target alike."""

    name: str = "absolute_value"

    def matches(self, days_until_target: int, notification_days: Collection[int]) -> bool:
        return abs(days_until_target) in notification_days


class ReminderEvaluator:
    """Evaluate entities against a match strategy and default reminder offsets."""

    def __init__(self, strategy: MatchStrategy, default_notification_days: Sequence[int]) -> None:
        self.strategy = strategy
        self.default_notification_days = tuple(default_notification_days)

    def evaluate(
        self, today: date | datetime, entities: Iterable[ReminderableEntity]
    ) -> list[MatchedEntity]:
        matched: list[MatchedEntity] = []
        for entity in entities:
            try:
                target = entity.target_date()
            except MalformedRecordError:
                logger.warning(
                    "Skipping %s %s (%s): malformed target date",
                    entity.kind,
                    entity.id,
                    entity.number,
                    exc_info=True,
                )
                continue
            if target is None:
                continue

            remaining = days_until(target, today)
            notification_days = (
                entity.notification_days
                if entity.notification_days is not None
                else self.default_notification_days
            )
            if self.strategy.matches(remaining, notification_days):
                logger.debug(
                    "%s %s matches %s with %s days to target",
                    entity.kind,
                    entity.number,
                    self.strategy.name,
                    remaining,
                )
                matched.append(
                    MatchedEntity(entity=entity, days_until_target=remaining, target_date=target)
                )
        return matched


__all__ = [
    "MatchStrategy",
    "FutureOnlyMatch",
    "AbsoluteValueMatch",
    "ReminderEvaluator",
]

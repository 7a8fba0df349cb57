"""Domain objects produced while evaluating and dispatching reminders."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from .reminderable_entity import ReminderableEntity

DISPATCH_STATUS_SENT = "sent"
DISPATCH_STATUS_FAILED = "failed"
DISPATCH_STATUS_SKIPPED = "skipped"


@dataclass(frozen=True)
class MatchedEntity:
    """An entity for which today is a notification day."""

    entity: ReminderableEntity
    days_until_target: int
    target_date: date | datetime


@dataclass(frozen=True)
class EmailMessage:
    """Message handed to the email transport."""

    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one send to one recipient."""

    entity_id: str
    recipient_id: str
    recipient_email: str
    status: str
    error: str | None = None


@dataclass
class DispatchReport:
    """Aggregated counts of a dispatch run."""

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    results: list[DispatchResult] = field(default_factory=list)

    def add(self, result: DispatchResult) -> "DispatchReport":
        """Fold ``result`` into the report and return it."""

        self.results.append(result)
        if result.status == DISPATCH_STATUS_SKIPPED:
            self.skipped += 1
            return self
        self.attempted += 1
        if result.status == DISPATCH_STATUS_SENT:
            self.succeeded += 1
        else:
            self.failed += 1
        return self

    def merge(self, other: "DispatchReport") -> "DispatchReport":
        for result in other.results:
            self.add(result)
        return self


__all__ = [
    "DISPATCH_STATUS_SENT",
    "DISPATCH_STATUS_FAILED",
    "DISPATCH_STATUS_SKIPPED",
    "MatchedEntity",
    "EmailMessage",
    "DispatchResult",
    "DispatchReport",
]

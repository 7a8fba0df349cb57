"""Domain entity describing a dated business record that can trigger reminders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from contract_reminders.utils.datetime import parse_record_date

ENTITY_KIND_CONTRACT = "contract"
ENTITY_KIND_PROCESS = "process"

RecordDate = date | datetime | str


@dataclass(frozen=True)
class ReminderableEntity:
    """Read-only snapshot of a contract or process with its reminder settings."""

    id: str
    title: str
    number: str
    kind: str
    status: str | None = None
    end_date: RecordDate | None = None
    opening_date: RecordDate | None = None
    created_at: RecordDate | None = None
    notification_days: tuple[int, ...] | None = None
    recipient_group_id: str | None = None
    owner_id: str | None = None

    def target_date(self) -> date | datetime | None:
        """Return the end date, falling back to the opening date.

        Raises :class:`MalformedRecordError` when the chosen value cannot be parsed.
        """

        if self.end_date not in (None, ""):
            return parse_record_date(self.end_date)
        return parse_record_date(self.opening_date)

    @property
    def has_group(self) -> bool:
        return bool(self.recipient_group_id)


__all__ = [
    "ENTITY_KIND_CONTRACT",
    "ENTITY_KIND_PROCESS",
    "RecordDate",
    "ReminderableEntity",
]

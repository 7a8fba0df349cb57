"""Session-scoped bookkeeping of the toasts already shown."""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Iterable
from datetime import date, datetime

from contract_reminders.domain.entities import PRIORITY_HIGH, NotificationRecord
from contract_reminders.utils import day_key


class ToastTracker:
    """Emit each high-priority unviewed record at most once per day.

    The tracker is a bounded LRU of record ids. It is cleared whenever
    :meth:`collect` is called for a different day than the previous call.
    """

    def __init__(self, max_entries: int = 500) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._day: str | None = None
        self._seen: OrderedDict[str, bool] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, notification_id: object) -> bool:
        return notification_id in self._seen

    def collect(self, day: date | datetime | str, records: Iterable[NotificationRecord]) -> list[NotificationRecord]:
        key = day if isinstance(day, str) else day_key(day)
        toasts = []
        with self._lock:
            if key != self._day:
                self._seen.clear()
                self._day = key
            for record in records:
                if record.priority != PRIORITY_HIGH or record.viewed or record.deleted:
                    continue
                if record.id in self._seen:
                    self._seen.move_to_end(record.id)
                    continue
                self._seen[record.id] = True
                toasts.append(record)
                if len(self._seen) > self.max_entries:
                    self._seen.popitem(last=False)
        return toasts

    def clear(self) -> None:
        with self._lock:
            self._seen.clear()
            self._day = None


__all__ = ["ToastTracker"]

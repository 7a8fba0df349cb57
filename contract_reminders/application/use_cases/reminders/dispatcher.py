"""Send reminder emails with per-recipient isolation and per-day dedup."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import date, datetime
from functools import partial, reduce

from contract_reminders.domain.entities import (
    DISPATCH_STATUS_FAILED,
    DISPATCH_STATUS_SENT,
    DISPATCH_STATUS_SKIPPED,
    DispatchReport,
    DispatchResult,
    EmailMessage,
    MatchedEntity,
    Recipient,
)
from contract_reminders.infrastructure.email import EmailTransport
from contract_reminders.infrastructure.repositories import SentReminderLedger
from contract_reminders.utils import day_key

from .recipients import RecipientResolver

logger = logging.getLogger(__name__)

MessageRenderer = Callable[[MatchedEntity, Recipient], EmailMessage]


def deliver_once(
    transport: EmailTransport,
    ledger: SentReminderLedger,
    *,
    entity_key: str,
    recipient: Recipient,
    day: str,
    message: EmailMessage | Callable[[], EmailMessage],
) -> DispatchResult:
    """Send ``message`` unless ``(entity_key, recipient, day)`` was already claimed.

    ``message`` may be a zero-argument callable. It is rendered only after the
    claim succeeds and a rendering error counts as a failed delivery.
    """

    address = recipient.email or ""
    if not ledger.claim(entity_key, recipient.id, day):
        logger.debug("Reminder %s already sent to %s on %s", entity_key, address, day)
        return DispatchResult(
            entity_id=entity_key,
            recipient_id=recipient.id,
            recipient_email=address,
            status=DISPATCH_STATUS_SKIPPED,
        )

    try:
        if callable(message):
            message = message()
        transport.send(message)
    except Exception as exc:
        ledger.release(entity_key, recipient.id, day)
        logger.error("Failed to send %s to %s: %s", entity_key, address, exc)
        return DispatchResult(
            entity_id=entity_key,
            recipient_id=recipient.id,
            recipient_email=address,
            status=DISPATCH_STATUS_FAILED,
            error=str(exc),
        )

    logger.info("Reminder %s sent to %s", entity_key, address)
    return DispatchResult(
        entity_id=entity_key,
        recipient_id=recipient.id,
        recipient_email=address,
        status=DISPATCH_STATUS_SENT,
    )


class NotificationDispatcher:
    """Deliver one message per matched entity and recipient."""

    def __init__(
        self,
        transport: EmailTransport,
        resolver: RecipientResolver,
        ledger: SentReminderLedger,
        render: MessageRenderer,
    ) -> None:
        self.transport = transport
        self.resolver = resolver
        self.ledger = ledger
        self.render = render

    def dispatch(
        self, matched: Iterable[MatchedEntity], today: date | datetime
    ) -> DispatchReport:
        key = day_key(today)
        return reduce(DispatchReport.add, self._results(matched, key), DispatchReport())

    def _results(self, matched: Iterable[MatchedEntity], key: str) -> Iterator[DispatchResult]:
        for item in matched:
            for recipient in self.resolver.recipients_for(item.entity):
                yield deliver_once(
                    self.transport,
                    self.ledger,
                    entity_key=item.entity.id,
                    recipient=recipient,
                    day=key,
                    message=partial(self.render, item, recipient),
                )


__all__ = ["MessageRenderer", "NotificationDispatcher", "deliver_once"]

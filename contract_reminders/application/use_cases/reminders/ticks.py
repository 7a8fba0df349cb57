"""Scheduler entry points running one reminder flow to completion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import partial

from sqlalchemy.orm import Session

from contract_reminders.config import Settings, get_settings
from contract_reminders.domain.entities import DispatchReport, ReminderableEntity
from contract_reminders.domain.errors import DataAccessError
from contract_reminders.infrastructure.email import EmailTransport
from contract_reminders.infrastructure.repositories import (
    GroupRepository,
    ReminderableEntityRepository,
    SentReminderLedger,
    SqlAlchemySentReminderLedger,
    UserRepository,
)
from contract_reminders.utils import day_key, now_in_app_timezone

from .dispatcher import MessageRenderer, NotificationDispatcher
from .evaluator import AbsoluteValueMatch, FutureOnlyMatch, MatchStrategy, ReminderEvaluator
from .messages import render_contract_expiry, render_process_reminder
from .recipients import RecipientResolver

logger = logging.getLogger(__name__)

FLOW_CONTRACT_EXPIRY = "contract_expiry"
FLOW_PROCESS_DEADLINE = "process_deadline"


@dataclass(frozen=True)
class ReminderFlow:
    """Configuration of one class of reminders."""

    name: str
    strategy: MatchStrategy
    default_notification_days: tuple[int, ...]
    fallback_to_owner: bool
    render: MessageRenderer
    load_entities: Callable[[ReminderableEntityRepository], Sequence[ReminderableEntity]]


@dataclass
class ReminderTickResult:
    """Outcome of one scheduler tick for one flow."""

    flow: str
    day_key: str
    matched: int = 0
    report: DispatchReport = field(default_factory=DispatchReport)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def contract_expiry_flow(settings: Settings) -> ReminderFlow:
    """Contracts notify their group, or their creator, N days before the end date."""

    return ReminderFlow(
        name=FLOW_CONTRACT_EXPIRY,
        strategy=FutureOnlyMatch(),
        default_notification_days=tuple(settings.contract_notification_days),
        fallback_to_owner=True,
        render=partial(render_contract_expiry, settings=settings),
        load_entities=ReminderableEntityRepository.list_active_contracts,
    )


def process_deadline_flow(settings: Settings) -> ReminderFlow:
    """Group processes notify N days before or after their target date."""

    return ReminderFlow(
        name=FLOW_PROCESS_DEADLINE,
        strategy=AbsoluteValueMatch(),
        default_notification_days=tuple(settings.process_notification_days),
        fallback_to_owner=False,
        render=partial(render_process_reminder, settings=settings),
        load_entities=ReminderableEntityRepository.list_open_group_processes,
    )


def run_reminder_flow(
    flow: ReminderFlow,
    *,
    entities: ReminderableEntityRepository,
    resolver: RecipientResolver,
    transport: EmailTransport,
    ledger: SentReminderLedger,
    today: date | datetime,
) -> ReminderTickResult:
    """Evaluate and dispatch ``flow``; data-source failures end the tick with an error."""

    result = ReminderTickResult(flow=flow.name, day_key=day_key(today))
    logger.info("Starting %s reminders for %s", flow.name, result.day_key)
    try:
        candidates = flow.load_entities(entities)
        evaluator = ReminderEvaluator(flow.strategy, flow.default_notification_days)
        matched = evaluator.evaluate(today, candidates)
        result.matched = len(matched)
        dispatcher = NotificationDispatcher(transport, resolver, ledger, flow.render)
        result.report = dispatcher.dispatch(matched, today)
    except DataAccessError as exc:
        logger.error("Aborting %s reminders: %s", flow.name, exc)
        result.error = str(exc)
        return result

    logger.info(
        "Finished %s reminders: %s matched, %s sent, %s failed, %s skipped",
        flow.name,
        result.matched,
        result.report.succeeded,
        result.report.failed,
        result.report.skipped,
    )
    return result


def _run_with_session(
    flow: ReminderFlow,
    session: Session,
    *,
    transport: EmailTransport,
    ledger: SentReminderLedger | None,
    today: date | datetime | None,
) -> ReminderTickResult:
    resolver = RecipientResolver(
        GroupRepository(session),
        UserRepository(session),
        fallback_to_owner=flow.fallback_to_owner,
    )
    return run_reminder_flow(
        flow,
        entities=ReminderableEntityRepository(session),
        resolver=resolver,
        transport=transport,
        ledger=ledger or SqlAlchemySentReminderLedger(session),
        today=today or now_in_app_timezone(),
    )


def run_contract_reminders(
    session: Session,
    *,
    transport: EmailTransport,
    ledger: SentReminderLedger | None = None,
    today: date | datetime | None = None,
    settings: Settings | None = None,
) -> ReminderTickResult:
    flow = contract_expiry_flow(settings or get_settings())
    return _run_with_session(flow, session, transport=transport, ledger=ledger, today=today)


def run_process_reminders(
    session: Session,
    *,
    transport: EmailTransport,
    ledger: SentReminderLedger | None = None,
    today: date | datetime | None = None,
    settings: Settings | None = None,
) -> ReminderTickResult:
    flow = process_deadline_flow(settings or get_settings())
    return _run_with_session(flow, session, transport=transport, ledger=ledger, today=today)


__all__ = [
    "FLOW_CONTRACT_EXPIRY",
    "FLOW_PROCESS_DEADLINE",
    "ReminderFlow",
    "ReminderTickResult",
    "contract_expiry_flow",
    "process_deadline_flow",
    "run_reminder_flow",
    "run_contract_reminders",
    "run_process_reminders",
]

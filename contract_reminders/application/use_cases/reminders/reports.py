"""Periodic report emails: group digests and per-user scheduled reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from contract_reminders.config import Settings, get_settings
from contract_reminders.domain.entities import (
    DISPATCH_STATUS_FAILED,
    EMAIL_FREQUENCY_DAILY,
    EMAIL_FREQUENCY_MONTHLY,
    EMAIL_FREQUENCY_WEEKLY,
    WEEKDAYS,
    DispatchReport,
    DispatchResult,
    EmailMessage,
    Recipient,
    RecipientGroup,
    ReminderableEntity,
    UserReportSettings,
)
from contract_reminders.domain.errors import DataAccessError, MalformedRecordError
from contract_reminders.infrastructure.email import EmailTransport
from contract_reminders.infrastructure.repositories import (
    GroupRepository,
    ReminderableEntityRepository,
    ReportSettingsRepository,
    SentReminderLedger,
    SqlAlchemyReportSettingsRepository,
    UserRepository,
)
from contract_reminders.utils import day_key, days_until, parse_record_date

from .dispatcher import deliver_once
from .messages import ReportRow, entity_row, render_group_daily_report, render_user_report

logger = logging.getLogger(__name__)


@dataclass
class ReportRunResult:
    """Outcome of one report job invocation."""

    job: str
    day_key: str
    report: DispatchReport = field(default_factory=DispatchReport)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def days_waiting(entity: ReminderableEntity, now: datetime) -> int:
    """Whole days since creation, never negative."""

    try:
        created = parse_record_date(entity.created_at)
    except MalformedRecordError:
        return 0
    if created is None:
        return 0
    return max(0, days_until(now, created))


def run_daily_group_reports(
    session: Session,
    *,
    transport: EmailTransport,
    ledger: SentReminderLedger,
    now: datetime,
    slot: str,
    settings: Settings | None = None,
) -> ReportRunResult:
    """Send each group member the list of the group's pending processes.

    ``slot`` identifies the scheduled run (e.g. the morning batch or the afternoon
    reinforcement) so each slot is delivered at most once per day.
    """

    settings = settings or get_settings()
    result = ReportRunResult(job=f"group_daily_report@{slot}", day_key=day_key(now))
    entities = ReminderableEntityRepository(session)
    try:
        groups = GroupRepository(session).list()
    except DataAccessError as exc:
        logger.error("Aborting daily group reports: %s", exc)
        result.error = str(exc)
        return result

    try:
        for group in groups:
            _send_group_report(
                group, entities, transport, ledger, now=now, slot=slot, result=result, settings=settings
            )
    except DataAccessError as exc:
        logger.error("Aborting daily group reports: %s", exc)
        result.error = str(exc)
    return result


def _send_group_report(
    group: RecipientGroup,
    entities: ReminderableEntityRepository,
    transport: EmailTransport,
    ledger: SentReminderLedger,
    *,
    now: datetime,
    slot: str,
    result: ReportRunResult,
    settings: Settings,
) -> None:
    try:
        pending = entities.list_pending_processes_for_group(group.id)
    except DataAccessError:
        logger.error("Unable to load processes of group %s", group.name, exc_info=True)
        return
    if not pending:
        return

    rows = [entity_row(entity, days=days_waiting(entity, now)) for entity in pending]
    for member in group.members:
        if not member.email:
            continue
        result.report.add(
            deliver_once(
                transport,
                ledger,
                entity_key=f"group-report:{group.id}:{slot}",
                recipient=member,
                day=result.day_key,
                message=partial(render_group_daily_report, member, group.name, rows, settings=settings),
            )
        )


def _parse_time(value: str | None) -> tuple[int, int] | None:
    if not value:
        return None
    try:
        hour_text, minute_text = value.split(":", 1)
        hour, minute = int(hour_text), int(minute_text)
    except ValueError:
        return None
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return hour, minute


def should_send_report(settings: UserReportSettings, now: datetime) -> bool:
    """Return ``True`` when ``now`` is the minute the user's report is due."""

    if settings.email_frequency == EMAIL_FREQUENCY_DAILY:
        scheduled = _parse_time(settings.daily_time)
    elif settings.email_frequency == EMAIL_FREQUENCY_WEEKLY:
        weekday = (settings.weekly_day or "").lower()
        if weekday not in WEEKDAYS or WEEKDAYS.index(weekday) != now.weekday():
            return False
        scheduled = _parse_time(settings.weekly_time)
    elif settings.email_frequency == EMAIL_FREQUENCY_MONTHLY:
        if settings.monthly_day != now.day:
            return False
        scheduled = _parse_time(settings.monthly_time)
    else:
        return False

    return scheduled == (now.hour, now.minute)


def _near_expiry_rows(
    entities: ReminderableEntityRepository, now: datetime, expiry_days: int
) -> list[ReportRow]:
    today = now.date()
    processes = entities.list_processes_ending_between(today, today + timedelta(days=expiry_days))
    rows = []
    for entity in processes:
        target = entity.target_date()
        rows.append(entity_row(entity, days=days_until(target, today) if target else None))
    return rows


def _compose_user_report(
    session: Session,
    recipient: Recipient,
    preferences: UserReportSettings,
    now: datetime,
    settings: Settings,
) -> EmailMessage:
    entities = ReminderableEntityRepository(session)
    near_expiry = None
    if preferences.report_processes_near_expiry:
        near_expiry = _near_expiry_rows(entities, now, preferences.report_expiry_days)

    groups: list[tuple[str, list[ReportRow]]] = []
    if preferences.report_group_processes:
        for group in GroupRepository(session).list_for_user(recipient.id):
            processes = entities.list_pending_processes_for_group(group.id)
            groups.append(
                (group.name, [entity_row(entity, days=days_waiting(entity, now)) for entity in processes])
            )

    return render_user_report(
        recipient,
        near_expiry=near_expiry,
        groups=groups,
        generated_at=now,
        settings=settings,
    )


def run_scheduled_reports(
    session: Session,
    *,
    transport: EmailTransport,
    ledger: SentReminderLedger,
    now: datetime,
    preferences: ReportSettingsRepository | None = None,
    settings: Settings | None = None,
) -> ReportRunResult:
    """Send the periodic report of every user whose schedule matches ``now``."""

    settings = settings or get_settings()
    preferences = preferences or SqlAlchemyReportSettingsRepository(session)
    result = ReportRunResult(job="scheduled_report", day_key=day_key(now))
    try:
        users = UserRepository(session).list()
    except DataAccessError as exc:
        logger.error("Aborting scheduled reports: %s", exc)
        result.error = str(exc)
        return result

    for user in users:
        user_settings = preferences.get(user.id)
        if not user.email or not should_send_report(user_settings, now):
            continue
        entity_key = f"report:{user_settings.email_frequency}"
        try:
            outcome = deliver_once(
                transport,
                ledger,
                entity_key=entity_key,
                recipient=user,
                day=result.day_key,
                message=partial(_compose_user_report, session, user, user_settings, now, settings),
            )
        except DataAccessError as exc:
            logger.error("Unable to deliver the report of %s: %s", user.email, exc)
            outcome = DispatchResult(
                entity_id=entity_key,
                recipient_id=user.id,
                recipient_email=user.email,
                status=DISPATCH_STATUS_FAILED,
                error=str(exc),
            )
        result.report.add(outcome)
    return result


__all__ = [
    "ReportRunResult",
    "days_waiting",
    "run_daily_group_reports",
    "should_send_report",
    "run_scheduled_reports",
]

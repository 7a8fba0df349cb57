"""Tests for group daily reports and per-user scheduled reports."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from conftest import RecordingTransport
from contract_reminders.application.use_cases.reminders import (
    run_daily_group_reports,
    run_scheduled_reports,
    should_send_report,
)
from contract_reminders.config import Settings
from contract_reminders.domain.entities import UserReportSettings
from contract_reminders.infrastructure.models import (
    GroupModel,
    ProcessModel,
    UserGroupModel,
    UserModel,
)
from contract_reminders.infrastructure.repositories import (
    InMemoryReportSettingsRepository,
    InMemorySentReminderLedger,
    SqlAlchemyReportSettingsRepository,
)

NOW = datetime(2024, 3, 15, 9, 0)  # a Friday
SETTINGS = Settings(database_url="sqlite://")


@pytest.mark.parametrize(
    ("preferences", "now", "expected"),
    [
        (UserReportSettings(user_id="U1"), NOW, True),
        (UserReportSettings(user_id="U1"), NOW.replace(minute=1), False),
        (UserReportSettings(user_id="U1", daily_time="9h"), NOW, False),
        (UserReportSettings(user_id="U1", email_frequency="weekly", weekly_day="friday"), NOW, True),
        (UserReportSettings(user_id="U1", email_frequency="weekly", weekly_day="monday"), NOW, False),
        (UserReportSettings(user_id="U1", email_frequency="monthly", monthly_day=15), NOW, True),
        (UserReportSettings(user_id="U1", email_frequency="monthly", monthly_day=1), NOW, False),
        (UserReportSettings(user_id="U1", email_frequency="hourly"), NOW, False),
    ],
)
def test_should_send_report(preferences: UserReportSettings, now: datetime, expected: bool) -> None:
    assert should_send_report(preferences, now) is expected


@pytest.fixture()
def seeded(db_session):
    db_session.add_all(
        [
            UserModel(id="U1", name="Ana", email="ana@example.com"),
            UserModel(id="U2", name="Bruno", email=None),
            UserModel(id="U3", name="Carla", email="carla@example.com"),
            GroupModel(id="G1", name="Compras"),
            GroupModel(id="G2", name="Jurídico"),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            UserGroupModel(user_id="U1", group_id="G1"),
            UserGroupModel(user_id="U2", group_id="G1"),
            UserGroupModel(user_id="U3", group_id="G2"),
            ProcessModel(
                id="P1",
                process_number="SEI-1",
                title="Aquisição de notebooks",
                status="em_andamento",
                group_id="G1",
                end_date=date(2024, 3, 18),
                created_at=NOW - timedelta(days=3),
            ),
            ProcessModel(
                id="P2",
                process_number="SEI-2",
                title="Processo finalizado",
                status="finalizado",
                group_id="G2",
                end_date=date(2024, 3, 18),
                created_at=NOW - timedelta(days=10),
            ),
        ]
    )
    db_session.commit()
    return db_session


def test_group_report_sent_to_members_of_groups_with_pending_processes(seeded) -> None:
    transport = RecordingTransport()
    ledger = InMemorySentReminderLedger()

    result = run_daily_group_reports(
        seeded, transport=transport, ledger=ledger, now=NOW, slot="09:00", settings=SETTINGS
    )

    assert result.ok
    assert [message.to for message in transport.sent] == ["ana@example.com"]
    assert "SEI-1" in transport.sent[0].html
    assert "Compras" in transport.sent[0].subject


def test_group_report_slots_are_independent(seeded) -> None:
    transport = RecordingTransport()
    ledger = InMemorySentReminderLedger()

    for slot in ("09:00", "09:00", "14:00"):
        run_daily_group_reports(
            seeded, transport=transport, ledger=ledger, now=NOW, slot=slot, settings=SETTINGS
        )

    assert len(transport.sent) == 2


def test_scheduled_reports_follow_each_users_schedule(seeded) -> None:
    transport = RecordingTransport()
    preferences = InMemoryReportSettingsRepository(
        {"U3": UserReportSettings(user_id="U3", email_frequency="weekly", weekly_day="monday")}
    )

    result = run_scheduled_reports(
        seeded,
        transport=transport,
        ledger=InMemorySentReminderLedger(),
        now=NOW,
        preferences=preferences,
        settings=SETTINGS,
    )

    assert result.ok
    assert [message.to for message in transport.sent] == ["ana@example.com"]
    html = transport.sent[0].html
    assert "SEI-1" in html
    assert "Compras" in html


def test_scheduled_reports_are_sent_once_per_day(seeded) -> None:
    transport = RecordingTransport()
    ledger = InMemorySentReminderLedger()

    for _ in range(2):
        run_scheduled_reports(
            seeded,
            transport=transport,
            ledger=ledger,
            now=NOW,
            preferences=InMemoryReportSettingsRepository(),
            settings=SETTINGS,
        )

    assert sorted(message.to for message in transport.sent) == ["ana@example.com", "carla@example.com"]


def test_sql_report_settings_default_and_save(seeded) -> None:
    repository = SqlAlchemyReportSettingsRepository(seeded)

    assert repository.get("U1") == UserReportSettings(user_id="U1")

    saved = repository.save(UserReportSettings(user_id="U1", email_frequency="monthly", monthly_day=10))

    assert repository.get("U1") == saved
    assert repository.get("U1").monthly_day == 10

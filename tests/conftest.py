"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os
import sys
from datetime import date
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read at import time by the database module.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "America/Sao_Paulo"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)
os.environ.pop("NOTIFICATION_STORE_DIR", None)

from contract_reminders.domain.entities import (  # noqa: E402
    ENTITY_KIND_CONTRACT,
    ENTITY_KIND_PROCESS,
    EmailMessage,
    ReminderableEntity,
)
from contract_reminders.domain.errors import EmailDeliveryError  # noqa: E402


class RecordingTransport:
    """Email transport that records messages and fails for chosen addresses."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.sent: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        if message.to in self.failing:
            raise EmailDeliveryError(f"Unable to deliver email to {message.to}")
        self.sent.append(message)


def make_process(entity_id: str = "P1", **overrides) -> ReminderableEntity:
    values = {
        "id": entity_id,
        "title": f"Processo {entity_id}",
        "number": f"SEI-{entity_id}",
        "kind": ENTITY_KIND_PROCESS,
        "status": "em_andamento",
        "recipient_group_id": "G1",
    }
    values.update(overrides)
    return ReminderableEntity(**values)


def make_contract(entity_id: str = "C1", **overrides) -> ReminderableEntity:
    values = {
        "id": entity_id,
        "title": f"Contrato {entity_id}",
        "number": f"CT-{entity_id}",
        "kind": ENTITY_KIND_CONTRACT,
        "status": "active",
    }
    values.update(overrides)
    return ReminderableEntity(**values)


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def today() -> date:
    return date(2024, 3, 15)


@pytest.fixture()
def db_session():
    """Yield a session bound to a freshly created in-memory schema."""

    from contract_reminders.infrastructure import database

    database.initialize_database()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        database.Base.metadata.drop_all(bind=database.engine)

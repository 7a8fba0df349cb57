"""Integration tests for the notification center and job endpoints."""

from __future__ import annotations

import importlib
from datetime import date, datetime

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from conftest import RecordingTransport
from contract_reminders.config import Settings, get_settings
from contract_reminders.infrastructure.models import (
    GroupModel,
    NotificationRecordModel,
    ProcessModel,
    UserGroupModel,
    UserModel,
)
from contract_reminders.interfaces.api.dependencies import get_email_transport

NOW = datetime(2024, 3, 15, 9, 0)
TODAY = NOW.date()
HEADERS = {"X-User-Id": "U1"}
CRON_HEADERS = {"X-Cron-Secret": "s3cret"}


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def client(db_session, monkeypatch, transport):
    """Return a test client with a seeded database and a frozen clock."""

    db_session.add_all(
        [
            UserModel(id="U1", name="Ana", email="ana@example.com"),
            GroupModel(id="G1", name="Compras"),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            UserGroupModel(user_id="U1", group_id="G1"),
            ProcessModel(
                id="P1",
                process_number="SEI-1",
                title="Aquisição de notebooks",
                status="em_andamento",
                group_id="G1",
                end_date=TODAY,
                created_at=datetime(2024, 3, 1, 10, 0),
            ),
            ProcessModel(
                id="P2",
                process_number="SEI-2",
                title="Processo sem grupo",
                status="em_andamento",
                end_date=date(2024, 4, 30),
                created_at=datetime(2024, 3, 1, 10, 0),
            ),
        ]
    )
    db_session.commit()

    routes = importlib.import_module("contract_reminders.interfaces.api.routes.notifications")
    jobs = importlib.import_module("contract_reminders.interfaces.api.routes.jobs")
    monkeypatch.setattr(routes, "now_in_app_timezone", lambda: NOW)
    monkeypatch.setattr(routes, "today_in_app_timezone", lambda: TODAY)
    monkeypatch.setattr(jobs, "now_in_app_timezone", lambda: NOW)

    from main import create_app

    app = create_app()
    app.dependency_overrides[get_settings] = lambda: Settings(
        database_url="sqlite://", cron_secret_key="s3cret"
    )
    app.dependency_overrides[get_email_transport] = lambda: transport
    with TestClient(app) as test_client:
        yield test_client


def test_requests_without_user_are_rejected(client: TestClient) -> None:
    assert client.get("/notifications").status_code == 401
    assert client.get("/notifications", headers={"X-User-Id": "../etc"}).status_code == 401


def test_sync_generates_notifications_and_toasts_once(client: TestClient) -> None:
    response = client.post("/notifications/sync", headers=HEADERS)
    assert response.status_code == 200
    payload = response.json()

    ids = {item["id"] for item in payload["notifications"]}
    assert ids == {"expiring_today-P1-2024-03-15", "unassigned_group-2024-03-15"}
    assert [toast["id"] for toast in payload["toasts"]] == ["expiring_today-P1-2024-03-15"]
    assert payload["unread_count"] == 2
    assert payload["added"] == 2

    again = client.post("/notifications/sync", headers=HEADERS).json()
    assert again["toasts"] == []
    assert again["added"] == 0


def test_notification_actions_and_read_model(client: TestClient) -> None:
    client.post("/notifications/sync", headers=HEADERS)
    notification_id = "expiring_today-P1-2024-03-15"

    viewed = client.put(f"/notifications/{notification_id}/mark-viewed", headers=HEADERS)
    assert viewed.status_code == 200
    assert viewed.json()["read"] is True and viewed.json()["viewed"] is True

    read_list = client.get("/notifications", params={"state": "read"}, headers=HEADERS).json()
    assert [item["id"] for item in read_list] == [notification_id]

    count = client.get("/notifications/unread-count", headers=HEADERS).json()
    assert count == {"day_key": "2024-03-15", "unread_count": 1}

    deleted = client.delete(f"/notifications/{notification_id}", headers=HEADERS)
    assert deleted.status_code == 200 and deleted.json()["deleted"] is True

    conflict = client.put(f"/notifications/{notification_id}/mark-read", headers=HEADERS)
    assert conflict.status_code == 409

    client.post("/notifications/sync", headers=HEADERS)
    tombstones = client.get("/notifications", params={"state": "deleted"}, headers=HEADERS).json()
    assert [item["id"] for item in tombstones] == [notification_id]

    restored = client.post(f"/notifications/{notification_id}/restore", headers=HEADERS).json()
    assert (restored["deleted"], restored["read"], restored["viewed"]) == (False, True, True)


def test_longest_accepted_user_id_fits_the_store(client: TestClient) -> None:
    user_id = "u" * 64
    owner_column = NotificationRecordModel.__table__.c.owner_id

    response = client.post("/notifications/sync", headers={"X-User-Id": user_id})

    assert response.status_code == 200
    assert owner_column.type.length >= len(user_id)
    assert client.get("/notifications", headers={"X-User-Id": "u" * 65}).status_code == 401


def test_unknown_notification_returns_404(client: TestClient) -> None:
    response = client.put("/notifications/missing/mark-read", headers=HEADERS)

    assert response.status_code == 404


def test_mark_all_read_and_stores_are_scoped_by_user(client: TestClient) -> None:
    client.post("/notifications/sync", headers=HEADERS)
    client.post("/notifications/sync", headers={"X-User-Id": "U2"})

    response = client.put("/notifications/mark-all-read", headers=HEADERS)
    assert response.json() == {"day_key": "2024-03-15", "updated": 2}

    other = client.get("/notifications/unread-count", headers={"X-User-Id": "U2"}).json()
    assert other["unread_count"] == 2


def test_jobs_require_cron_secret(client: TestClient) -> None:
    assert client.post("/jobs/process-reminders").status_code == 401
    assert client.post("/jobs/process-reminders", headers={"X-Cron-Secret": "nope"}).status_code == 401


def test_group_report_job_is_idempotent(client: TestClient, transport: RecordingTransport) -> None:
    first = client.post("/jobs/group-reports", headers=CRON_HEADERS)
    second = client.post("/jobs/group-reports", headers=CRON_HEADERS)

    assert first.status_code == 200
    assert first.json()["succeeded"] == 1
    assert second.json()["skipped"] == 1
    assert [message.to for message in transport.sent] == ["ana@example.com"]


def test_job_reports_data_access_errors_as_unavailable(client: TestClient, db_session) -> None:
    ProcessModel.__table__.drop(bind=db_session.get_bind())

    response = client.post("/jobs/process-reminders", headers=CRON_HEADERS)

    assert response.status_code == 503


def test_json_store_directory_backend(client: TestClient, tmp_path) -> None:
    client.app.dependency_overrides[get_settings] = lambda: Settings(
        database_url="sqlite://", notification_store_dir=str(tmp_path)
    )

    response = client.post("/notifications/sync", headers=HEADERS)

    assert response.status_code == 200
    assert (tmp_path / "U1.json").exists()

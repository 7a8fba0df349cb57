"""Unit tests for the email transports."""

from __future__ import annotations

import json
import types

import pytest

from contract_reminders.config import Settings
from contract_reminders.domain.entities import EmailMessage
from contract_reminders.domain.errors import EmailDeliveryError
from contract_reminders.infrastructure import email as email_module

MESSAGE = EmailMessage(to="user@example.com", subject="Subject", html="<p>Body</p>")


class _StubSendGridAPIClient:
    """Stand-in for ``SendGridAPIClient`` returning a successful response."""

    instances: list["_StubSendGridAPIClient"] = []

    def __init__(self, api_key: str):
        self.api_key = api_key
        self.client = types.SimpleNamespace(timeout=None)
        self.sent = []
        _StubSendGridAPIClient.instances.append(self)

    def send(self, message):
        self.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture(autouse=True)
def _reset_instances():
    _StubSendGridAPIClient.instances = []
    yield


def _transport() -> email_module.SendGridEmailTransport:
    return email_module.SendGridEmailTransport("SG.fake", "sender@example.com", timeout=5.0)


def test_build_transport_without_configuration_simulates() -> None:
    settings = Settings(database_url="sqlite://")

    transport = email_module.build_email_transport(settings)

    assert isinstance(transport, email_module.SimulatedEmailTransport)
    transport.send(MESSAGE)
    assert transport.sent == [MESSAGE]


def test_build_transport_with_configuration_uses_sendgrid() -> None:
    settings = Settings(
        database_url="sqlite://",
        sendgrid_api_key="SG.fake",
        sendgrid_sender="sender@example.com",
        email_timeout_seconds=3,
    )

    transport = email_module.build_email_transport(settings)

    assert isinstance(transport, email_module.SendGridEmailTransport)
    assert transport.timeout == 3


def test_incomplete_sendgrid_pair_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(database_url="sqlite://", sendgrid_api_key="SG.fake")


def test_send_success_applies_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(email_module, "SendGridAPIClient", _StubSendGridAPIClient)

    _transport().send(MESSAGE)

    [client] = _StubSendGridAPIClient.instances
    assert client.api_key == "SG.fake"
    assert client.client.timeout == 5.0
    assert len(client.sent) == 1


def test_send_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(_StubSendGridAPIClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"), pytest.raises(EmailDeliveryError) as excinfo:
        _transport().send(MESSAGE)

    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text
    assert "user@example.com" in str(excinfo.value)


def test_send_rejects_unsuccessful_status(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(_StubSendGridAPIClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=500, body=b"")

    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"), pytest.raises(EmailDeliveryError):
        _transport().send(MESSAGE)

    assert "status 500" in caplog.text


def test_send_wraps_timeouts(monkeypatch: pytest.MonkeyPatch) -> None:
    class TimingOutClient(_StubSendGridAPIClient):
        def send(self, message):
            raise TimeoutError("timed out")

    monkeypatch.setattr(email_module, "SendGridAPIClient", TimingOutClient)

    with pytest.raises(EmailDeliveryError) as excinfo:
        _transport().send(MESSAGE)

    assert isinstance(excinfo.value.__cause__, TimeoutError)

"""Email transports used to deliver reminder messages."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from contract_reminders.config import Settings, get_settings
from contract_reminders.domain.entities import EmailMessage
from contract_reminders.domain.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


class EmailTransport(Protocol):
    """Deliver one message or raise :class:`EmailDeliveryError`."""

    def send(self, message: EmailMessage) -> None:
        ...


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"status {status_code}: {details}"
    if status_code:
        return f"status {status_code}"
    return details or "unknown error"


class SendGridEmailTransport:
    """Send messages through the SendGrid REST API."""

    def __init__(self, api_key: str, sender: str, *, timeout: float) -> None:
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout

    def send(self, message: EmailMessage) -> None:
        mail = Mail(
            from_email=self.sender,
            to_emails=message.to,
            subject=message.subject,
            html_content=message.html,
        )

        client = SendGridAPIClient(self.api_key)
        # Requests built from this client inherit the timeout.
        client.client.timeout = self.timeout
        try:
            response = client.send(mail)
        except Exception as exc:
            description = _describe_failure(
                getattr(exc, "status_code", None), getattr(exc, "body", None)
            )
            if description == "unknown error":
                description = repr(exc)
            logger.error("SendGrid API request failed with %s", description)
            raise EmailDeliveryError(
                f"Unable to deliver email to {message.to}: {description}"
            ) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_failure(status_code, getattr(response, "body", None))
            logger.error("SendGrid API responded with %s", description)
            raise EmailDeliveryError(f"Unable to deliver email to {message.to}: {description}")


class SimulatedEmailTransport:
    """Log messages instead of sending them; used when SendGrid is not configured."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        logger.info("[simulation] Email to %s: %s", message.to, message.subject)
        self.sent.append(message)


def build_email_transport(settings: Settings | None = None) -> EmailTransport:
    """Return the transport matching the configured credentials."""

    settings = settings or get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; emails will only be logged")
        return SimulatedEmailTransport()
    return SendGridEmailTransport(
        settings.sendgrid_api_key,
        settings.sendgrid_sender,
        timeout=settings.email_timeout_seconds,
    )


__all__ = [
    "EmailTransport",
    "SendGridEmailTransport",
    "SimulatedEmailTransport",
    "build_email_transport",
]

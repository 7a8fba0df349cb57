"""FastAPI dependency utilities."""

from __future__ import annotations

import hmac
import re
import threading
from pathlib import Path

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from contract_reminders.application.use_cases.notifications import (
    NotificationStore,
    ToastTracker,
    build_store,
)
from contract_reminders.config import Settings, get_settings
from contract_reminders.infrastructure.database import get_db
from contract_reminders.infrastructure.email import EmailTransport, build_email_transport
from contract_reminders.infrastructure.repositories import (
    JsonFileNotificationRepository,
    NotificationRepository,
    SqlAlchemyNotificationRepository,
)

_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
_trackers_lock = threading.Lock()


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the owner of the notification store from the ``X-User-Id`` header."""

    if not x_user_id or not _USER_ID_PATTERN.match(x_user_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuário não identificado",
        )
    return x_user_id


def get_notification_repository(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> NotificationRepository:
    if settings.notification_store_dir:
        return JsonFileNotificationRepository(Path(settings.notification_store_dir) / f"{user_id}.json")
    return SqlAlchemyNotificationRepository(db, user_id)


def get_notification_store(
    repository: NotificationRepository = Depends(get_notification_repository),
    settings: Settings = Depends(get_settings),
) -> NotificationStore:
    return build_store(repository, settings)


def get_toast_tracker(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
) -> ToastTracker:
    """Return the toast tracker of ``user_id``, kept for the life of the app."""

    with _trackers_lock:
        trackers: dict[str, ToastTracker] = request.app.state.toast_trackers
        tracker = trackers.get(user_id)
        if tracker is None:
            tracker = ToastTracker(settings.toast_cache_size)
            trackers[user_id] = tracker
        return tracker


def get_email_transport(settings: Settings = Depends(get_settings)) -> EmailTransport:
    return build_email_transport(settings)


def verify_cron_secret(
    x_cron_secret: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject job triggers without the shared cron secret."""

    if not settings.cron_secret_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="CRON_SECRET_KEY não configurada",
        )
    if not x_cron_secret or not hmac.compare_digest(x_cron_secret, settings.cron_secret_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Não autorizado",
        )

"""Endpoints da central de notificações."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from contract_reminders.application.use_cases.notifications import (
    NotificationStore,
    ToastTracker,
    build_generator,
    sync_notifications,
)
from contract_reminders.config import Settings, get_settings
from contract_reminders.domain.entities import STATE_ACTIVE, NotificationRecord
from contract_reminders.domain.errors import (
    DataAccessError,
    NotificationNotFoundError,
    NotificationStateError,
    NotificationStoreError,
)
from contract_reminders.infrastructure.database import get_db
from contract_reminders.infrastructure.repositories import ReminderableEntityRepository
from contract_reminders.interfaces.api.dependencies import get_notification_store, get_toast_tracker
from contract_reminders.interfaces.api.schemas import (
    BulkUpdateResponse,
    NotificationRead,
    NotificationState,
    NotificationSyncResponse,
    UnreadCountResponse,
)
from contract_reminders.utils import day_key, now_in_app_timezone, today_in_app_timezone

router = APIRouter(prefix="/notifications", tags=["notifications"])

T = TypeVar("T")


def _run_action(action: Callable[[], T]) -> T:
    """Execute a store action translating its errors into HTTP responses."""

    try:
        return action()
    except NotificationNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notificação {exc.notification_id} não encontrada",
        ) from exc
    except NotificationStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except NotificationStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Não foi possível atualizar as notificações, tente novamente",
        ) from exc


def _record_to_schema(record: NotificationRecord) -> NotificationRead:
    return NotificationRead.from_record(record)


@router.post("/sync", response_model=NotificationSyncResponse)
def sync(
    db: Session = Depends(get_db),
    store: NotificationStore = Depends(get_notification_store),
    tracker: ToastTracker = Depends(get_toast_tracker),
    settings: Settings = Depends(get_settings),
) -> NotificationSyncResponse:
    """Gera as notificações do dia e devolve as ativas e os toasts pendentes."""

    try:
        entities = ReminderableEntityRepository(db).list_processes()
    except DataAccessError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Base de registros indisponível",
        ) from exc

    result = _run_action(
        lambda: sync_notifications(
            store,
            build_generator(settings),
            tracker,
            entities=entities,
            now=now_in_app_timezone(),
        )
    )
    return NotificationSyncResponse(
        day_key=result.day_key,
        added=result.added,
        unread_count=result.unread_count,
        notifications=[_record_to_schema(record) for record in result.records],
        toasts=[_record_to_schema(record) for record in result.toasts],
    )


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    state: NotificationState = Query(STATE_ACTIVE),
    day: date | None = Query(None),
    store: NotificationStore = Depends(get_notification_store),
) -> list[NotificationRead]:
    """Lista as notificações retidas no estado pedido."""

    records = _run_action(lambda: store.list_by_state(day or today_in_app_timezone(), state))
    return [_record_to_schema(record) for record in records]


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    day: date | None = Query(None),
    store: NotificationStore = Depends(get_notification_store),
) -> UnreadCountResponse:
    target = day or today_in_app_timezone()
    count = _run_action(lambda: store.unread_count(target))
    return UnreadCountResponse(day_key=day_key(target), unread_count=count)


@router.put("/mark-all-read", response_model=BulkUpdateResponse)
def mark_all_read(store: NotificationStore = Depends(get_notification_store)) -> BulkUpdateResponse:
    """Marca como lidas apenas as notificações ativas de hoje."""

    today = today_in_app_timezone()
    updated = _run_action(lambda: store.mark_all_read(today))
    return BulkUpdateResponse(day_key=day_key(today), updated=updated)


@router.put("/mark-all-viewed", response_model=BulkUpdateResponse)
def mark_all_viewed(store: NotificationStore = Depends(get_notification_store)) -> BulkUpdateResponse:
    today = today_in_app_timezone()
    updated = _run_action(lambda: store.mark_all_viewed(today))
    return BulkUpdateResponse(day_key=day_key(today), updated=updated)


@router.put("/{notification_id}/mark-read", response_model=NotificationRead)
def mark_read(
    notification_id: str, store: NotificationStore = Depends(get_notification_store)
) -> NotificationRead:
    return _record_to_schema(_run_action(lambda: store.mark_as_read(notification_id)))


@router.put("/{notification_id}/mark-viewed", response_model=NotificationRead)
def mark_viewed(
    notification_id: str, store: NotificationStore = Depends(get_notification_store)
) -> NotificationRead:
    return _record_to_schema(_run_action(lambda: store.mark_as_viewed(notification_id)))


@router.put("/{notification_id}/mark-unread", response_model=NotificationRead)
def mark_unread(
    notification_id: str, store: NotificationStore = Depends(get_notification_store)
) -> NotificationRead:
    return _record_to_schema(_run_action(lambda: store.mark_as_unread(notification_id)))


@router.delete("/{notification_id}", response_model=NotificationRead)
def delete_notification(
    notification_id: str, store: NotificationStore = Depends(get_notification_store)
) -> NotificationRead:
    """Exclui a notificação; ela não volta a ser gerada no mesmo dia."""

    return _record_to_schema(_run_action(lambda: store.delete(notification_id)))


@router.post("/{notification_id}/restore", response_model=NotificationRead)
def restore_notification(
    notification_id: str, store: NotificationStore = Depends(get_notification_store)
) -> NotificationRead:
    return _record_to_schema(_run_action(lambda: store.restore(notification_id)))

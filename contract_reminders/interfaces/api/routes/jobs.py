"""Gatilhos HTTP dos jobs agendados (cron)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from contract_reminders.application.use_cases.reminders import (
    ReminderTickResult,
    ReportRunResult,
    run_contract_reminders,
    run_daily_group_reports,
    run_process_reminders,
    run_scheduled_reports,
)
from contract_reminders.config import Settings, get_settings
from contract_reminders.infrastructure.database import get_db
from contract_reminders.infrastructure.email import EmailTransport
from contract_reminders.infrastructure.repositories import SqlAlchemySentReminderLedger
from contract_reminders.interfaces.api.dependencies import get_email_transport, verify_cron_secret
from contract_reminders.interfaces.api.schemas import JobRunResponse
from contract_reminders.utils import now_in_app_timezone

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    dependencies=[Depends(verify_cron_secret)],
)


def _tick_response(result: ReminderTickResult) -> JobRunResponse:
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)
    return JobRunResponse.from_report(result.flow, result.day_key, result.report, matched=result.matched)


def _report_response(result: ReportRunResult) -> JobRunResponse:
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.error)
    return JobRunResponse.from_report(result.job, result.day_key, result.report)


@router.post("/contract-reminders", response_model=JobRunResponse)
def contract_reminders(
    db: Session = Depends(get_db),
    transport: EmailTransport = Depends(get_email_transport),
    settings: Settings = Depends(get_settings),
) -> JobRunResponse:
    """Envia os lembretes de vencimento de contratos do dia."""

    result = run_contract_reminders(
        db,
        transport=transport,
        ledger=SqlAlchemySentReminderLedger(db),
        today=now_in_app_timezone(),
        settings=settings,
    )
    return _tick_response(result)


@router.post("/process-reminders", response_model=JobRunResponse)
def process_reminders(
    db: Session = Depends(get_db),
    transport: EmailTransport = Depends(get_email_transport),
    settings: Settings = Depends(get_settings),
) -> JobRunResponse:
    """Envia os lembretes de prazo dos processos atribuídos a grupos."""

    result = run_process_reminders(
        db,
        transport=transport,
        ledger=SqlAlchemySentReminderLedger(db),
        today=now_in_app_timezone(),
        settings=settings,
    )
    return _tick_response(result)


@router.post("/group-reports", response_model=JobRunResponse)
def group_reports(
    slot: str | None = Query(None, pattern=r"^\d{2}:\d{2}$"),
    db: Session = Depends(get_db),
    transport: EmailTransport = Depends(get_email_transport),
    settings: Settings = Depends(get_settings),
) -> JobRunResponse:
    """Envia o relatório diário de processos pendentes para cada grupo."""

    result = run_daily_group_reports(
        db,
        transport=transport,
        ledger=SqlAlchemySentReminderLedger(db),
        now=now_in_app_timezone(),
        slot=slot or settings.daily_reminder_time,
        settings=settings,
    )
    return _report_response(result)


@router.post("/scheduled-reports", response_model=JobRunResponse)
def scheduled_reports(
    db: Session = Depends(get_db),
    transport: EmailTransport = Depends(get_email_transport),
    settings: Settings = Depends(get_settings),
) -> JobRunResponse:
    """Envia os relatórios dos usuários cujo horário configurado é agora."""

    result = run_scheduled_reports(
        db,
        transport=transport,
        ledger=SqlAlchemySentReminderLedger(db),
        now=now_in_app_timezone(),
        settings=settings,
    )
    return _report_response(result)

"""Subjects and HTML bodies of reminder and report emails."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from html import escape

from contract_reminders.config import Settings
from contract_reminders.domain.entities import (
    EmailMessage,
    MatchedEntity,
    Recipient,
    ReminderableEntity,
)
from contract_reminders.domain.errors import MalformedRecordError
from contract_reminders.utils import calendar_date


@dataclass(frozen=True)
class ReportRow:
    """One line of a process table inside a report email."""

    number: str
    title: str
    status: str | None
    end_date: date | None = None
    days: int | None = None


def format_date(value: date | datetime | None) -> str:
    if value is None:
        return "Não definido"
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%d/%m/%Y")


def _layout(settings: Settings, heading: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\"></head>"
        "<body style=\"font-family: Arial, sans-serif; color: #0f132e;\">"
        f"<h2>{escape(heading)}</h2>"
        f"{body}"
        f"<p><a href=\"{escape(settings.app_url)}\">Acessar o sistema</a></p>"
        "<p style=\"font-size: 12px; color: #536d88;\">"
        f"Este é um e-mail automático. Não responda a esta mensagem. {escape(settings.app_name)}"
        "</p></body></html>"
    )


def render_contract_expiry(
    matched: MatchedEntity, recipient: Recipient, *, settings: Settings
) -> EmailMessage:
    entity = matched.entity
    days = matched.days_until_target
    subject = f"Contrato {entity.number} vence em {days} dias"
    body = (
        f"<p>Olá, {escape(recipient.name)}!</p>"
        f"<p>O contrato <strong>{escape(entity.title)}</strong> ({escape(entity.number)}) "
        f"vencerá em {days} dias, em {format_date(matched.target_date)}.</p>"
        "<p>Verifique a necessidade de renovação ou encerramento.</p>"
    )
    return EmailMessage(
        to=recipient.email or "",
        subject=subject,
        html=_layout(settings, "Contrato próximo ao vencimento", body),
    )


def render_process_reminder(
    matched: MatchedEntity, recipient: Recipient, *, settings: Settings
) -> EmailMessage:
    entity = matched.entity
    days = abs(matched.days_until_target)
    subject = f"Processo {entity.number} aguarda sua ação ({days} dias)"
    body = (
        f"<p>Olá, {escape(recipient.name)}!</p>"
        "<p><strong>Atenção:</strong> seu grupo é responsável pelo processo abaixo e ele aguarda ação.</p>"
        "<ul>"
        f"<li><strong>Número:</strong> {escape(entity.number)}</li>"
        f"<li><strong>Título:</strong> {escape(entity.title)}</li>"
        f"<li><strong>Status atual:</strong> {escape(entity.status or '-')}</li>"
        f"<li><strong>Dias:</strong> {days}</li>"
        "</ul>"
    )
    return EmailMessage(
        to=recipient.email or "",
        subject=subject,
        html=_layout(settings, "Lembrete de processo", body),
    )


def _table(rows: Sequence[ReportRow], *, days_header: str) -> str:
    header = "".join(
        f"<th style=\"padding: 8px; border: 1px solid #d1d5db; text-align: left;\">{name}</th>"
        for name in ("Número", "Título", "Status", "Vencimento", days_header)
    )
    lines = []
    for row in rows:
        cells = (
            escape(row.number),
            escape(row.title),
            escape(row.status or "-"),
            format_date(row.end_date),
            "-" if row.days is None else str(row.days),
        )
        lines.append(
            "<tr>"
            + "".join(f"<td style=\"padding: 8px; border: 1px solid #d1d5db;\">{cell}</td>" for cell in cells)
            + "</tr>"
        )
    return (
        "<table style=\"width: 100%; border-collapse: collapse;\">"
        f"<thead><tr>{header}</tr></thead><tbody>{''.join(lines)}</tbody></table>"
    )


def render_group_daily_report(
    recipient: Recipient,
    group_name: str,
    rows: Sequence[ReportRow],
    *,
    settings: Settings,
) -> EmailMessage:
    subject = f"Relatório Diário - {group_name} - {len(rows)} processos pendentes"
    body = (
        f"<p>Olá, {escape(recipient.name)}!</p>"
        f"<p>Processos pendentes do grupo <strong>{escape(group_name)}</strong>:</p>"
        + _table(rows, days_header="Dias aguardando")
    )
    return EmailMessage(
        to=recipient.email or "",
        subject=subject,
        html=_layout(settings, "Relatório diário de processos", body),
    )


def render_user_report(
    recipient: Recipient,
    *,
    near_expiry: Sequence[ReportRow] | None,
    groups: Sequence[tuple[str, Sequence[ReportRow]]],
    generated_at: datetime,
    settings: Settings,
) -> EmailMessage:
    sections = [f"<p>Olá <strong>{escape(recipient.name)}</strong>, aqui está seu relatório de processos:</p>"]
    has_content = False
    if near_expiry is not None:
        sections.append("<h3>Processos Próximos do Vencimento</h3>")
        if near_expiry:
            sections.append(_table(near_expiry, days_header="Dias restantes"))
            has_content = True
        else:
            sections.append("<p>Nenhum processo próximo do vencimento encontrado.</p>")
    for group_name, rows in groups:
        sections.append(f"<h3>Processos do Grupo: {escape(group_name)}</h3>")
        if rows:
            sections.append(_table(rows, days_header="Dias aguardando"))
            has_content = True
        else:
            sections.append(f"<p>Nenhum processo encontrado para o grupo <strong>{escape(group_name)}</strong>.</p>")
    if not has_content:
        sections.append("<p><strong>Nenhum processo encontrado para este relatório.</strong></p>")
    sections.append(f"<p>Relatório gerado automaticamente em {generated_at.strftime('%d/%m/%Y %H:%M')}.</p>")
    return EmailMessage(
        to=recipient.email or "",
        subject="Relatório de Processos",
        html=_layout(settings, "Relatório de Processos", "".join(sections)),
    )


def entity_row(entity: ReminderableEntity, *, days: int | None = None) -> ReportRow:
    """Build a report row; unparsable end dates are shown as undefined."""

    try:
        end = calendar_date(entity.end_date)
    except MalformedRecordError:
        end = None
    return ReportRow(
        number=entity.number,
        title=entity.title,
        status=entity.status,
        end_date=end,
        days=days,
    )


__all__ = [
    "ReportRow",
    "format_date",
    "render_contract_expiry",
    "render_process_reminder",
    "render_group_daily_report",
    "render_user_report",
    "entity_row",
]

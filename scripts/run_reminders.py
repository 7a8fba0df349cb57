"""Run the scheduled reminder and report jobs from the command line."""

from __future__ import annotations

import argparse
import logging

from contract_reminders.application.use_cases.reminders import (
    run_contract_reminders,
    run_daily_group_reports,
    run_process_reminders,
    run_scheduled_reports,
)
from contract_reminders.config import get_settings
from contract_reminders.infrastructure.database import SessionLocal, initialize_database
from contract_reminders.infrastructure.email import SimulatedEmailTransport, build_email_transport
from contract_reminders.infrastructure.repositories import SqlAlchemySentReminderLedger
from contract_reminders.utils import now_in_app_timezone

JOBS = ("contracts", "processes", "group-report", "scheduled-report")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the job runner."""

    parser = argparse.ArgumentParser(
        description="Executa os jobs de lembretes e relatórios por e-mail.",
    )
    parser.add_argument(
        "jobs",
        nargs="*",
        choices=JOBS,
        default=["contracts", "processes"],
        help="Jobs a executar (padrão: contracts processes)",
    )
    parser.add_argument(
        "--slot",
        default=None,
        help="Horário do relatório de grupos, ex. 09:00 ou 14:00 (padrão: DAILY_REMINDER_TIME)",
    )
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Apenas registra os e-mails no log, sem enviá-los.",
    )
    parser.add_argument("--verbose", action="store_true", help="Exibe logs de depuração.")
    return parser.parse_args()


def main() -> None:
    """Run the selected jobs and exit with an error when any of them aborts."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()
    transport = SimulatedEmailTransport() if args.simulate else build_email_transport(settings)

    initialize_database()
    session = SessionLocal()
    failures = []
    try:
        now = now_in_app_timezone()
        for job in args.jobs:
            if job == "contracts":
                result = run_contract_reminders(session, transport=transport, today=now, settings=settings)
                name = result.flow
            elif job == "processes":
                result = run_process_reminders(session, transport=transport, today=now, settings=settings)
                name = result.flow
            elif job == "group-report":
                result = run_daily_group_reports(
                    session,
                    transport=transport,
                    ledger=SqlAlchemySentReminderLedger(session),
                    now=now,
                    slot=args.slot or settings.daily_reminder_time,
                    settings=settings,
                )
                name = result.job
            else:
                result = run_scheduled_reports(
                    session,
                    transport=transport,
                    ledger=SqlAlchemySentReminderLedger(session),
                    now=now,
                    settings=settings,
                )
                name = result.job

            report = result.report
            print(
                f"{name}: {report.succeeded} enviados, {report.failed} falhas, "
                f"{report.skipped} já enviados hoje"
            )
            if not result.ok:
                failures.append(f"{name}: {result.error}")
    finally:
        session.close()

    if failures:
        raise SystemExit("Jobs interrompidos:\n  " + "\n  ".join(failures))


if __name__ == "__main__":
    main()

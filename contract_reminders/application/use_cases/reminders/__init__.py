"""Server-side reminder evaluation and email dispatch."""

from .dispatcher import MessageRenderer, NotificationDispatcher, deliver_once
from .evaluator import AbsoluteValueMatch, FutureOnlyMatch, MatchStrategy, ReminderEvaluator
from .recipients import RecipientResolver
from .reports import (
    ReportRunResult,
    run_daily_group_reports,
    run_scheduled_reports,
    should_send_report,
)
from .ticks import (
    FLOW_CONTRACT_EXPIRY,
    FLOW_PROCESS_DEADLINE,
    ReminderFlow,
    ReminderTickResult,
    contract_expiry_flow,
    process_deadline_flow,
    run_contract_reminders,
    run_process_reminders,
    run_reminder_flow,
)

__all__ = [
    "MessageRenderer",
    "NotificationDispatcher",
    "deliver_once",
    "AbsoluteValueMatch",
    "FutureOnlyMatch",
    "MatchStrategy",
    "ReminderEvaluator",
    "RecipientResolver",
    "ReportRunResult",
    "run_daily_group_reports",
    "run_scheduled_reports",
    "should_send_report",
    "FLOW_CONTRACT_EXPIRY",
    "FLOW_PROCESS_DEADLINE",
    "ReminderFlow",
    "ReminderTickResult",
    "contract_expiry_flow",
    "process_deadline_flow",
    "run_contract_reminders",
    "run_process_reminders",
    "run_reminder_flow",
]

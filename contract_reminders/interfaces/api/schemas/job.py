"""Pydantic models describing scheduler job results."""

from __future__ import annotations

from pydantic import BaseModel, Field

from contract_reminders.domain.entities import DispatchReport, DispatchResult


class DispatchResultRead(BaseModel):
    entity_id: str
    recipient_id: str | None = None
    recipient_email: str | None = None
    status: str
    error: str | None = None

    @classmethod
    def from_result(cls, result: DispatchResult) -> "DispatchResultRead":
        return cls(
            entity_id=result.entity_id,
            recipient_id=result.recipient_id,
            recipient_email=result.recipient_email,
            status=result.status,
            error=result.error,
        )


class JobRunResponse(BaseModel):
    """Summary of a reminder tick or a report run."""

    job: str
    day_key: str
    matched: int | None = None
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    results: list[DispatchResultRead] = Field(default_factory=list)

    @classmethod
    def from_report(
        cls, job: str, day_key: str, report: DispatchReport, *, matched: int | None = None
    ) -> "JobRunResponse":
        return cls(
            job=job,
            day_key=day_key,
            matched=matched,
            attempted=report.attempted,
            succeeded=report.succeeded,
            failed=report.failed,
            skipped=report.skipped,
            results=[DispatchResultRead.from_result(result) for result in report.results],
        )

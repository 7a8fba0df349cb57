"""SQLAlchemy model recording reminders already sent on a given day."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from contract_reminders.infrastructure.database import Base
from contract_reminders.utils import now_in_app_naive_datetime


class SentReminderModel(Base):
    """One delivered (or in-flight) reminder per entity, recipient and day."""

    __tablename__ = "sent_reminders"
    __table_args__ = (
        UniqueConstraint("entity_key", "recipient_id", "day_key", name="uq_sent_reminder"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_key = Column(String(120), nullable=False)
    recipient_id = Column(String(36), nullable=False)
    day_key = Column(String(10), nullable=False, index=True)
    claimed_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["SentReminderModel"]

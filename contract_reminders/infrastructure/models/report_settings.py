"""SQLAlchemy model for per-user email report settings."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.sql import expression

from contract_reminders.infrastructure.database import Base


class ReportSettingsModel(Base):
    """Database representation of a user's report schedule."""

    __tablename__ = "user_notification_settings"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    email_frequency = Column(String(10), nullable=False, default="daily")
    daily_time = Column(String(5), nullable=True)
    weekly_day = Column(String(10), nullable=True)
    weekly_time = Column(String(5), nullable=True)
    monthly_day = Column(Integer, nullable=True)
    monthly_time = Column(String(5), nullable=True)
    report_processes_near_expiry = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    report_group_processes = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    report_expiry_days = Column(Integer, nullable=False, default=7)


__all__ = ["ReportSettingsModel"]

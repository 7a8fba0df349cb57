"""Typed storage for user report settings."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_reminders.domain.entities import UserReportSettings
from contract_reminders.infrastructure.models import ReportSettingsModel

logger = logging.getLogger(__name__)


class ReportSettingsRepository(Protocol):
    def get(self, user_id: str) -> UserReportSettings:
        ...

    def save(self, settings: UserReportSettings) -> UserReportSettings:
        ...


class InMemoryReportSettingsRepository:
    """Settings kept in a dictionary, defaults when the user has none."""

    def __init__(self, settings: dict[str, UserReportSettings] | None = None) -> None:
        self._settings = dict(settings or {})

    def get(self, user_id: str) -> UserReportSettings:
        return self._settings.get(user_id) or UserReportSettings(user_id=user_id)

    def save(self, settings: UserReportSettings) -> UserReportSettings:
        self._settings[settings.user_id] = settings
        return settings


class SqlAlchemyReportSettingsRepository:
    """Settings stored in the ``user_notification_settings`` table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> UserReportSettings:
        try:
            model = self.session.get(ReportSettingsModel, user_id)
        except SQLAlchemyError:
            logger.exception("Unable to load report settings of user %s; using defaults", user_id)
            return UserReportSettings(user_id=user_id)
        if model is None:
            logger.debug("No report settings for user %s; using defaults", user_id)
            return UserReportSettings(user_id=user_id)
        return self._to_entity(model)

    def save(self, settings: UserReportSettings) -> UserReportSettings:
        model = self.session.get(ReportSettingsModel, settings.user_id)
        if model is None:
            model = ReportSettingsModel(user_id=settings.user_id)
        model.email_frequency = settings.email_frequency
        model.daily_time = settings.daily_time
        model.weekly_day = settings.weekly_day
        model.weekly_time = settings.weekly_time
        model.monthly_day = settings.monthly_day
        model.monthly_time = settings.monthly_time
        model.report_processes_near_expiry = settings.report_processes_near_expiry
        model.report_group_processes = settings.report_group_processes
        model.report_expiry_days = settings.report_expiry_days
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ReportSettingsModel) -> UserReportSettings:
        defaults = UserReportSettings(user_id=model.user_id)
        return UserReportSettings(
            user_id=model.user_id,
            email_frequency=model.email_frequency or defaults.email_frequency,
            daily_time=model.daily_time or defaults.daily_time,
            weekly_day=model.weekly_day or defaults.weekly_day,
            weekly_time=model.weekly_time or defaults.weekly_time,
            monthly_day=model.monthly_day or defaults.monthly_day,
            monthly_time=model.monthly_time or defaults.monthly_time,
            report_processes_near_expiry=bool(model.report_processes_near_expiry),
            report_group_processes=bool(model.report_group_processes),
            report_expiry_days=model.report_expiry_days or defaults.report_expiry_days,
        )


__all__ = [
    "ReportSettingsRepository",
    "InMemoryReportSettingsRepository",
    "SqlAlchemyReportSettingsRepository",
]

"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from contract_reminders.domain.entities import TERMINAL_STATUSES

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_name: str = Field(
        default="Sistema de Gestão de Contratos",
        description="Product name shown in outgoing emails",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the web client, used for links inside emails",
    )
    app_timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone (or UTC offset) used to compute the current day",
    )
    cron_secret_key: str | None = Field(
        default=None,
        description="Shared secret expected in the X-Cron-Secret header of job triggers",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    email_timeout_seconds: float = Field(
        default=10.0,
        description="Maximum number of seconds to wait for the email provider",
        gt=0,
    )
    contract_notification_days: list[int] = Field(
        default_factory=lambda: [1],
        description="Reminder offsets used for contracts without notification days",
    )
    process_notification_days: list[int] = Field(
        default_factory=lambda: [1, 7, 15, 30],
        description="Reminder offsets used for group processes without notification days",
    )
    terminal_statuses: list[str] = Field(
        default_factory=lambda: list(TERMINAL_STATUSES),
        description="Statuses that stop expired notifications from being generated",
    )
    recent_window_hours: int = Field(
        default=24,
        description="Window in hours for the recently created notification rule",
        gt=0,
    )
    active_retention_days: int = Field(
        default=7,
        description="Days a non-deleted notification is kept after its day",
        ge=0,
    )
    deleted_retention_days: int = Field(
        default=1,
        description="Days a deleted notification (tombstone) is kept after its day",
        ge=0,
    )
    toast_cache_size: int = Field(
        default=500,
        description="Maximum number of notification ids remembered as already toasted",
        gt=0,
    )
    notification_store_dir: str | None = Field(
        default=None,
        description="Directory of per-user JSON notification stores; the database is used when unset",
    )
    daily_reminder_time: str = Field(
        default="09:00",
        description="Time of the daily reminder batch",
    )
    reinforcement_report_time: str = Field(
        default="14:00",
        description="Time of the reinforcement group report",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

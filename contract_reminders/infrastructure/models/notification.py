"""SQLAlchemy model for persisted in-app notification records."""

from sqlalchemy import Boolean, Column, String, Text
from sqlalchemy.sql import expression

from contract_reminders.infrastructure.database import Base


class NotificationRecordModel(Base):
    """Database representation of a notification owned by one store."""

    __tablename__ = "notification_records"

    owner_id = Column(String(64), primary_key=True)
    id = Column(String(160), primary_key=True)
    category = Column(String(30), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    entity_id = Column(String(36), nullable=True)
    priority = Column(String(10), nullable=False)
    created_day_key = Column(String(10), nullable=False, index=True)
    read = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    viewed = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    deleted = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    timestamp = Column(String(40), nullable=False)


__all__ = ["NotificationRecordModel"]

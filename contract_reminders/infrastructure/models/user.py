"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, String, func

from contract_reminders.infrastructure.database import Base


class UserModel(Base):
    """Database representation of the system user."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]

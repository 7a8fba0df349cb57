"""SQLAlchemy model for SEI processes."""

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from contract_reminders.infrastructure.database import Base

PROCESS_STATUS_FINISHED = "finalizado"


class ProcessModel(Base):
    """Database representation of a bidding/SEI process."""

    __tablename__ = "sei_processes"

    id = Column(String(36), primary_key=True, index=True)
    process_number = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    type = Column(String(50), nullable=True)
    status = Column(String(30), nullable=False, index=True)
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=True, index=True)
    opening_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    notification_days = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    group = relationship("GroupModel", lazy="joined")


__all__ = ["ProcessModel", "PROCESS_STATUS_FINISHED"]

"""SQLAlchemy model for contracts."""

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, String, func

from contract_reminders.infrastructure.database import Base

CONTRACT_STATUS_ACTIVE = "active"


class ContractModel(Base):
    """Database representation of a government contract."""

    __tablename__ = "contracts"

    id = Column(String(36), primary_key=True, index=True)
    contract_number = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    supplier = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=CONTRACT_STATUS_ACTIVE, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    notification_days = Column(JSON, nullable=True)
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=True)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ContractModel", "CONTRACT_STATUS_ACTIVE"]

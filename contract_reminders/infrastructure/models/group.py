"""SQLAlchemy models for responsible groups and their members."""

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from contract_reminders.infrastructure.database import Base


class GroupModel(Base):
    """Database representation of a group responsible for processes."""

    __tablename__ = "groups"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(120), nullable=False)

    memberships = relationship(
        "UserGroupModel",
        back_populates="group",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class UserGroupModel(Base):
    """Membership of a user in a group."""

    __tablename__ = "user_groups"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    group_id = Column(String(36), ForeignKey("groups.id"), primary_key=True)

    group = relationship("GroupModel", back_populates="memberships")
    user = relationship("UserModel", lazy="joined")


__all__ = ["GroupModel", "UserGroupModel"]

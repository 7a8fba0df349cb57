"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_reminders.domain.entities import Recipient
from contract_reminders.domain.errors import DataAccessError, RecipientResolutionError
from contract_reminders.infrastructure.models import UserModel


class UserRepository:
    """Provide read access to users as reminder recipients."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self) -> Sequence[Recipient]:
        try:
            models = self.session.query(UserModel).order_by(UserModel.name.asc()).all()
        except SQLAlchemyError as exc:
            raise DataAccessError("Unable to load users from the record store") from exc
        return [self._to_entity(model) for model in models]

    def get(self, user_id: str) -> Recipient | None:
        try:
            model = self.session.get(UserModel, user_id)
        except SQLAlchemyError as exc:
            raise RecipientResolutionError(f"Unable to load user {user_id}") from exc
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: UserModel) -> Recipient:
        return Recipient(id=model.id, email=model.email, name=model.name)


__all__ = ["UserRepository"]

"""Read-only access to groups and their members."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_reminders.domain.entities import Recipient, RecipientGroup
from contract_reminders.domain.errors import DataAccessError, RecipientResolutionError
from contract_reminders.infrastructure.models import GroupModel, UserGroupModel


class GroupRepository:
    """Provide lookups of :class:`RecipientGroup` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, group_id: str) -> RecipientGroup | None:
        try:
            model = self.session.get(GroupModel, group_id)
        except SQLAlchemyError as exc:
            raise RecipientResolutionError(f"Unable to load group {group_id}") from exc
        return self._to_entity(model) if model else None

    def list(self) -> Sequence[RecipientGroup]:
        try:
            models = self.session.query(GroupModel).order_by(GroupModel.name.asc()).all()
        except SQLAlchemyError as exc:
            raise DataAccessError("Unable to load groups from the record store") from exc
        return [self._to_entity(model) for model in models]

    def list_for_user(self, user_id: str) -> Sequence[RecipientGroup]:
        try:
            models = (
                self.session.query(GroupModel)
                .join(UserGroupModel, UserGroupModel.group_id == GroupModel.id)
                .filter(UserGroupModel.user_id == user_id)
                .order_by(GroupModel.name.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise DataAccessError(f"Unable to load groups of user {user_id}") from exc
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: GroupModel) -> RecipientGroup:
        members = [
            Recipient(
                id=membership.user.id,
                email=membership.user.email,
                name=membership.user.name,
            )
            for membership in model.memberships
            if membership.user is not None
        ]
        return RecipientGroup(id=model.id, name=model.name, members=members)


__all__ = ["GroupRepository"]

"""Resolve who should receive a reminder for a record."""

from __future__ import annotations

import logging
from typing import Protocol

from contract_reminders.domain.entities import Recipient, RecipientGroup, ReminderableEntity
from contract_reminders.domain.errors import RecipientResolutionError

logger = logging.getLogger(__name__)


class GroupLookup(Protocol):
    def get(self, group_id: str) -> RecipientGroup | None:
        ...


class UserLookup(Protocol):
    def get(self, user_id: str) -> Recipient | None:
        ...


class RecipientResolver:
    """Map groups (and optionally record owners) to email recipients."""

    def __init__(
        self,
        groups: GroupLookup,
        users: UserLookup | None = None,
        *,
        fallback_to_owner: bool = False,
    ) -> None:
        self.groups = groups
        self.users = users
        self.fallback_to_owner = fallback_to_owner

    def resolve(self, group_id: str) -> list[Recipient]:
        """Return the members of ``group_id``; missing or failing groups yield ``[]``."""

        try:
            group = self.groups.get(group_id)
        except RecipientResolutionError:
            logger.warning("Unable to resolve recipients of group %s", group_id, exc_info=True)
            return []
        if group is None:
            logger.info("Group %s not found; no recipients", group_id)
            return []
        return [member for member in group.members if member.email]

    def recipients_for(self, entity: ReminderableEntity) -> list[Recipient]:
        if entity.recipient_group_id:
            return self.resolve(entity.recipient_group_id)
        if self.fallback_to_owner and entity.owner_id and self.users is not None:
            return self._resolve_owner(entity.owner_id)
        logger.info("%s %s has no responsible group; skipping", entity.kind, entity.number)
        return []

    def _resolve_owner(self, owner_id: str) -> list[Recipient]:
        try:
            owner = self.users.get(owner_id)
        except RecipientResolutionError:
            logger.warning("Unable to resolve owner %s", owner_id, exc_info=True)
            return []
        if owner is None or not owner.email:
            return []
        return [owner]


__all__ = ["RecipientResolver", "GroupLookup", "UserLookup"]

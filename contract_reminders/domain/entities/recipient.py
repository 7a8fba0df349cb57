"""Domain entities describing who receives reminders."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Recipient:
    """A user able to receive reminder emails."""

    id: str
    email: str | None
    name: str


@dataclass
class RecipientGroup:
    """A named group whose members share responsibility for records."""

    id: str
    name: str
    members: list[Recipient] = field(default_factory=list)


__all__ = ["Recipient", "RecipientGroup"]

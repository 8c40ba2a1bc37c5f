"""Data models for the group blueprint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from groupbuy.constants import MAX_MEMBERS


class GroupStatus(str, Enum):
    """Lifecycle status of a group."""

    OPEN = "OPEN"
    FULL = "FULL"
    # Declared for completeness; expiry never transitions a group.
    EXPIRED = "EXPIRED"


@dataclass(frozen=True)
class User:
    """A participant in a group."""

    id: str
    name: str
    avatar: str


@dataclass
class Group:
    """A group pooling users into one discounted purchase.

    Only ``members`` and ``max_members`` are stored; ``status`` is derived so
    it can never disagree with the membership.
    """

    id: str
    creator: User
    members: list[User] = field(default_factory=list)
    max_members: int = MAX_MEMBERS
    expires_at: float = 0.0

    @property
    def status(self) -> GroupStatus:
        """Return FULL once the group is at capacity, otherwise OPEN."""
        if len(self.members) >= self.max_members:
            return GroupStatus.FULL
        return GroupStatus.OPEN

    @property
    def missing(self) -> int:
        """Return how many more members the group needs."""
        return self.max_members - len(self.members)

    def has_member(self, user_id: str) -> bool:
        """Return True if the user is already in the group."""
        return any(member.id == user_id for member in self.members)


@dataclass(frozen=True)
class Course:
    """The static catalog entry being sold."""

    id: str
    title: str
    original_price: int
    group_price: int
    description: str
    features: tuple[str, ...] = ()


@dataclass(frozen=True)
class Confirmation:
    """What the user receives once they have joined a group."""

    order_id: str
    formed_at: str
    group_id: str | None
    consultant_id: str
    note: str

"""Presentation facts derived from a group for the storefront screens."""

from __future__ import annotations

from dataclasses import dataclass

from groupbuy.group.models import Group, User

LEADER_TAG = "团长"


@dataclass(frozen=True)
class MemberSlot:
    """One avatar position on the group detail screen."""

    member: User | None
    is_leader: bool = False

    @property
    def is_empty(self) -> bool:
        """Return True for a placeholder slot."""
        return self.member is None


@dataclass(frozen=True)
class GroupDetail:
    """Everything the detail screen needs to know about a group."""

    group: Group
    missing: int
    slots: tuple[MemberSlot, ...]

    @property
    def is_full(self) -> bool:
        """Return True once no more members are needed."""
        return self.missing == 0

    @property
    def can_join(self) -> bool:
        """Return True while the join call-to-action should be offered."""
        return not self.is_full


@dataclass(frozen=True)
class GroupCard:
    """A row on the home listing."""

    group_id: str
    title: str
    avatars: tuple[User, ...]
    missing: int


def detail_for(group: Group) -> GroupDetail:
    """Project a group onto the detail screen.

    Fullness is recomputed from the membership length, never read from the
    stored status.
    """
    missing = max(group.max_members - len(group.members), 0)
    slots = []
    for index in range(group.max_members):
        member = group.members[index] if index < len(group.members) else None
        is_leader = member is not None and index == 0
        slots.append(MemberSlot(member=member, is_leader=is_leader))
    return GroupDetail(group=group, missing=missing, slots=tuple(slots))


def card_for(group: Group) -> GroupCard:
    """Project a group onto a home listing row."""
    return GroupCard(
        group_id=group.id,
        title=f"{group.creator.name} 的团",
        avatars=tuple(group.members),
        missing=group.max_members - len(group.members),
    )

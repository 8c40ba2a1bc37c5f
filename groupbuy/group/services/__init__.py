"""Services for the group blueprint."""

from .group_service import StorefrontController
from .presentation import GroupCard, GroupDetail, MemberSlot, card_for, detail_for

__all__ = [
    "GroupCard",
    "GroupDetail",
    "MemberSlot",
    "StorefrontController",
    "card_for",
    "detail_for",
]

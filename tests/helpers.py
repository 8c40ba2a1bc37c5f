"""Shared fixtures for the storefront tests."""

from groupbuy.group.models import Group, User
from groupbuy.group.seed import CURRENT_USER

TEST_CONFIG = {
    "TESTING": True,
    "WTF_CSRF_ENABLED": False,
    "SECRET_KEY": "test",
    "GEMINI_API_KEY": None,
    "JOIN_REDIRECT_DELAY": 0,
}


class FakeClock:
    """A manually advanced clock for delayed transitions."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_user(user_id, name=None):
    """Build a user with a predictable avatar."""
    name = name or user_id.title()
    return User(id=user_id, name=name, avatar=f"https://example.com/{user_id}.png")


def make_group(group_id, *members, max_members=3):
    """Build a group whose creator is the first member."""
    members = list(members) or [make_user(f"{group_id}-owner")]
    return Group(
        id=group_id,
        creator=members[0],
        members=members,
        max_members=max_members,
        expires_at=0.0,
    )


__all__ = ["CURRENT_USER", "FakeClock", "TEST_CONFIG", "make_group", "make_user"]

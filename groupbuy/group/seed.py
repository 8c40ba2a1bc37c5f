"""Static catalog and seed data for a fresh storefront session."""

from __future__ import annotations

from groupbuy.constants import MAX_MEMBERS

from .models import Course, Group, User

CURRENT_USER = User(id="u1", name="我", avatar="https://picsum.photos/seed/me/100/100")

COURSE = Course(
    id="c1",
    title="极致Essay 1v1 包过辅导试听课",
    original_price=1099,
    group_price=699,
    description=(
        "极致Essay 专业导师 1v1 深度诊断，定制专属提升方案。"
        "涵盖 Essay 润色、挂科申诉、课程辅导。"
    ),
)

_ALEX = User(id="u2", name="Alex", avatar="https://picsum.photos/seed/alex/100/100")
_SARAH = User(id="u3", name="Sarah", avatar="https://picsum.photos/seed/sarah/100/100")
_MIKE = User(id="u4", name="Mike", avatar="https://picsum.photos/seed/mike/100/100")


def seed_groups(now: float) -> list[Group]:
    """Build the two groups every new session starts with."""
    return [
        Group(
            id="g1",
            creator=_ALEX,
            members=[_ALEX],
            max_members=MAX_MEMBERS,
            expires_at=now + 3600,
        ),
        Group(
            id="g2",
            creator=_SARAH,
            members=[_SARAH, _MIKE],
            max_members=MAX_MEMBERS,
            expires_at=now + 7200,
        ),
    ]

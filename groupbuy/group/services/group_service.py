"""Service layer for the group store and screen navigation."""

from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime
from typing import Callable

from groupbuy.constants import (
    CONSULTANT_NOTE,
    CONSULTANT_WECHAT_ID,
    FORMED_AT_FORMAT,
    GROUP_TTL_SECONDS,
    JOIN_REDIRECT_DELAY,
    MAX_MEMBERS,
    ORDER_ID_PREFIX,
    ORDER_ID_UPPER_BOUND,
)
from groupbuy.core.types import View
from groupbuy.errors import GroupNotFound
from groupbuy.group.models import Confirmation, Group, GroupStatus, User
from groupbuy.group.seed import CURRENT_USER, seed_groups

logger = logging.getLogger(__name__)


class StorefrontController:
    """Single source of truth for the groups collection and the active screen.

    Every mutation is a local read-modify-write on ``groups``; there is no
    server to confirm anything, so joins are applied optimistically.
    """

    def __init__(
        self,
        current_user: User = CURRENT_USER,
        groups: list[Group] | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        redirect_delay: float = JOIN_REDIRECT_DELAY,
        consultant_id: str = CONSULTANT_WECHAT_ID,
    ) -> None:
        """Initialize the controller on the home screen."""
        self.current_user = current_user
        self._clock = clock
        self._wall_clock = wall_clock
        self.redirect_delay = redirect_delay
        self.consultant_id = consultant_id
        self.groups: list[Group] = (
            list(groups) if groups is not None else seed_groups(wall_clock())
        )
        self.active_group_id: str | None = None
        self.confirmation: Confirmation | None = None
        self._view = View.HOME
        self._success_at: float | None = None

    # --- Read side ---

    @property
    def view(self) -> View:
        """Return the active screen, landing any due delayed transition."""
        self._apply_pending()
        return self._view

    @property
    def pending_success(self) -> bool:
        """Return True while a join is waiting to land on the success screen."""
        self._apply_pending()
        return self._success_at is not None

    @property
    def success_remaining(self) -> float:
        """Return the seconds left before a pending join lands, or 0."""
        if self._success_at is None:
            return 0.0
        return max(self._success_at - self._clock(), 0.0)

    @property
    def active_group(self) -> Group | None:
        """Return the active group, or None if the id no longer resolves."""
        if self.active_group_id is None:
            return None
        return self.find_group(self.active_group_id)

    def find_group(self, group_id: str) -> Group | None:
        """Look up a group by id."""
        return next((g for g in self.groups if g.id == group_id), None)

    def get_group(self, group_id: str) -> Group:
        """Look up a group by id, raising if it does not exist."""
        group = self.find_group(group_id)
        if group is None:
            raise GroupNotFound(group_id)
        return group

    def open_groups(self) -> list[Group]:
        """Return the groups shown on the home listing."""
        return [g for g in self.groups if g.status == GroupStatus.OPEN]

    # --- Actions ---

    def create_group(self) -> Group | None:
        """Start a new group led by the current user and show its details."""
        if self._finished("create_group"):
            return None
        now = self._wall_clock()
        group = Group(
            id=f"g{secrets.token_hex(6)}",
            creator=self.current_user,
            members=[self.current_user],
            max_members=MAX_MEMBERS,
            expires_at=now + GROUP_TTL_SECONDS,
        )
        self.groups.insert(0, group)
        self.active_group_id = group.id
        self._view = View.GROUP_DETAIL
        logger.info(f"User {self.current_user.id} created group {group.id}")
        return group

    def select_group(self, group_id: str) -> None:
        """Make a group active and show its details."""
        if not self._on_screen(View.HOME, "select_group"):
            return
        if self.find_group(group_id) is None:
            logger.warning(f"Selected group {group_id} does not exist")
        self.active_group_id = group_id
        self._view = View.GROUP_DETAIL

    def back(self) -> None:
        """Return from the group detail screen to the home listing."""
        if self.view is View.GROUP_DETAIL:
            self._view = View.HOME

    def confirm_join(self, group_id: str) -> Group | None:
        """Add the current user to a group and schedule the success screen.

        Only the group detail screen can join. Joining a group the user
        already belongs to leaves the membership untouched but still moves
        the flow forward.
        """
        if not self._on_screen(View.GROUP_DETAIL, "confirm_join"):
            return None
        group = self.find_group(group_id)
        if group is None:
            logger.warning(f"Join requested for unknown group {group_id}")
        elif group.has_member(self.current_user.id):
            logger.info(f"User {self.current_user.id} already in group {group_id}")
        elif group.status == GroupStatus.OPEN:
            group.members.append(self.current_user)
            logger.info(
                f"User {self.current_user.id} joined group {group_id} "
                f"({len(group.members)}/{group.max_members})"
            )
        else:
            logger.warning(f"Group {group_id} is full; membership unchanged")

        if self._success_at is None:
            self._success_at = self._clock() + self.redirect_delay
        self.active_group_id = group_id
        self._apply_pending()
        return group

    # --- Internals ---

    def _finished(self, action: str) -> bool:
        if self.view is View.SUCCESS:
            logger.warning(f"Ignoring {action} after the session reached SUCCESS")
            return True
        return False

    def _on_screen(self, expected: View, action: str) -> bool:
        if self._finished(action):
            return False
        if self._view is not expected:
            logger.warning(f"Ignoring {action} on {self._view.value}")
            return False
        return True

    def _apply_pending(self) -> None:
        if self._success_at is None or self._clock() < self._success_at:
            return
        self._success_at = None
        self._view = View.SUCCESS
        self.confirmation = Confirmation(
            order_id=f"{ORDER_ID_PREFIX}{secrets.randbelow(ORDER_ID_UPPER_BOUND)}",
            formed_at=datetime.fromtimestamp(self._wall_clock()).strftime(
                FORMED_AT_FORMAT
            ),
            group_id=self.active_group_id,
            consultant_id=self.consultant_id,
            note=CONSULTANT_NOTE,
        )

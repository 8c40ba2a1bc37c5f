"""In-memory registry of storefront sessions, keyed by browser session token."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from groupbuy.chat.services import ChatSession
from groupbuy.constants import (
    CONSULTANT_WECHAT_ID,
    JOIN_REDIRECT_DELAY,
    MAX_SESSIONS,
    SESSION_IDLE_TIMEOUT,
)
from groupbuy.group.services.group_service import StorefrontController

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)


@dataclass
class StorefrontSession:
    """Everything one visitor has done since the page was first opened."""

    controller: StorefrontController
    chat: ChatSession = field(default_factory=ChatSession)
    last_seen: float = 0.0


class SessionRegistry:
    """Process-wide map of session token to storefront session.

    Nothing is persisted; a process restart or a reset discards the session.
    Sessions are kept in least-recently-seen order. Those idle for longer
    than ``idle_timeout`` seconds are evicted on the next access, and the
    oldest are evicted once more than ``max_sessions`` are held.
    """

    def __init__(
        self,
        idle_timeout: float = SESSION_IDLE_TIMEOUT,
        max_sessions: int = MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty registry."""
        self._sessions: OrderedDict[str, StorefrontSession] = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock
        self.idle_timeout = idle_timeout
        self.max_sessions = max_sessions
        self._controller_options: dict[str, Any] = {}
        self.controller_factory: Callable[..., StorefrontController] = (
            StorefrontController
        )

    def init_app(self, app: Flask) -> None:
        """Read controller and eviction settings from the app config."""
        self._controller_options = {
            "redirect_delay": float(
                app.config.get("JOIN_REDIRECT_DELAY", JOIN_REDIRECT_DELAY)
            ),
            "consultant_id": app.config.get(
                "CONSULTANT_WECHAT_ID", CONSULTANT_WECHAT_ID
            ),
        }
        self.idle_timeout = float(
            app.config.get("SESSION_IDLE_TIMEOUT", SESSION_IDLE_TIMEOUT)
        )
        self.max_sessions = int(app.config.get("MAX_SESSIONS", MAX_SESSIONS))
        app.extensions["storefront_sessions"] = self

    @staticmethod
    def new_token() -> str:
        """Return a fresh opaque session token."""
        return secrets.token_urlsafe(16)

    def get_or_create(self, token: str) -> StorefrontSession:
        """Return the session for a token, seeding a new one if needed."""
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            session = self._sessions.get(token)
            if session is None:
                session = StorefrontSession(
                    controller=self.controller_factory(**self._controller_options)
                )
                self._sessions[token] = session
                logger.info("Started a new storefront session")
                self._evict_overflow()
            else:
                self._sessions.move_to_end(token)
            session.last_seen = now
            return session

    def discard(self, token: str) -> None:
        """Drop a session so the next request starts from scratch."""
        with self._lock:
            self._sessions.pop(token, None)

    def _evict_idle(self, now: float) -> None:
        expired = 0
        while self._sessions:
            token, session = next(iter(self._sessions.items()))
            if now - session.last_seen <= self.idle_timeout:
                break
            del self._sessions[token]
            expired += 1
        if expired:
            logger.info(f"Evicted {expired} idle storefront session(s)")

    def _evict_overflow(self) -> None:
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)
            logger.warning("Storefront session limit reached; evicted the oldest")

    def __contains__(self, token: str) -> bool:
        return token in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

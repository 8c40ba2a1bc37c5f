"""Request-scoped access to the visitor's storefront session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app, g, session

from groupbuy.constants import SESSION_TOKEN_KEY

if TYPE_CHECKING:
    from .session_store import SessionRegistry, StorefrontSession


def get_registry() -> SessionRegistry:
    """Return the registry attached to the current app."""
    return current_app.extensions["storefront_sessions"]


def current_storefront() -> StorefrontSession:
    """Return the storefront session for this browser, creating one if needed."""
    if "storefront" in g:
        return g.storefront
    registry = get_registry()
    token = session.get(SESSION_TOKEN_KEY)
    if not token:
        token = registry.new_token()
        session[SESSION_TOKEN_KEY] = token
    g.storefront = registry.get_or_create(token)
    return g.storefront


def reset_storefront() -> None:
    """Discard this browser's session; the next request starts over."""
    token = session.pop(SESSION_TOKEN_KEY, None)
    if token:
        get_registry().discard(token)
    g.pop("storefront", None)

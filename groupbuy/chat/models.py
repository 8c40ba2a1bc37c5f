"""Data models for the chat blueprint."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChatRole(str, Enum):
    """Who authored a chat message."""

    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ChatMessage:
    """One bubble in the advisory chat."""

    role: ChatRole
    text: str

    def to_content(self) -> dict:
        """Return the role-tagged content block sent to the model."""
        return {"role": self.role.value, "parts": [{"text": self.text}]}

"""Service layer for the advisory chat."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from google import genai

from groupbuy.constants import (
    CHAT_CONFIG_ERROR,
    CHAT_EMPTY_REPLY,
    CHAT_GREETING,
    CHAT_TEMPERATURE,
    CHAT_TRANSPORT_ERROR,
    CHAT_WIDGET_ERROR,
    GEMINI_MODEL,
)

from .models import ChatMessage, ChatRole
from .prompts import SYSTEM_INSTRUCTION

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)

_UNAVAILABLE = object()


def _to_content(turn: ChatMessage | Mapping[str, Any]) -> dict[str, Any]:
    """Map a prior turn onto a role-tagged content block."""
    if isinstance(turn, ChatMessage):
        return turn.to_content()
    role = turn["role"]
    if isinstance(role, ChatRole):
        role = role.value
    return {"role": role, "parts": [{"text": turn["text"]}]}


class AdvisoryChatBridge:
    """Forward one user utterance, with prior turns, to the generation service.

    The client handle is built lazily on first use and cached, including the
    case where no API key is configured. Reconfiguring the bridge is the only
    way to attempt construction again.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = GEMINI_MODEL,
        temperature: float = CHAT_TEMPERATURE,
        system_instruction: str = SYSTEM_INSTRUCTION,
        client_factory: Callable[..., Any] | None = None,
    ) -> None:
        """Initialize the bridge without touching the network."""
        self.model = model
        self.temperature = temperature
        self.system_instruction = system_instruction
        self._client_factory = client_factory
        self._api_key = api_key
        self._client: Any = None

    def init_app(self, app: Flask) -> None:
        """Read credentials and model settings from the app config."""
        self.configure(
            api_key=app.config.get("GEMINI_API_KEY"),
            model=app.config.get("GEMINI_MODEL", GEMINI_MODEL),
            temperature=float(app.config.get("CHAT_TEMPERATURE", CHAT_TEMPERATURE)),
        )
        app.extensions["advisor"] = self

    def configure(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
    ) -> None:
        """Replace the settings and drop any cached client handle."""
        self._api_key = api_key
        if model:
            self.model = model
        if temperature is not None:
            self.temperature = temperature
        self._client = None

    def get_client(self) -> Any | None:
        """Return the cached client, or None if it cannot be built."""
        if self._client is None:
            self._client = self._build_client()
        if self._client is _UNAVAILABLE:
            return None
        return self._client

    def _build_client(self) -> Any:
        if not self._api_key:
            logger.error("Gemini API key missing")
            return _UNAVAILABLE
        factory = self._client_factory or genai.Client
        try:
            return factory(api_key=self._api_key)
        except Exception as e:
            logger.error(f"Could not create Gemini client: {e}")
            return _UNAVAILABLE

    def build_request(
        self,
        utterance: str,
        prior_turns: Iterable[ChatMessage | Mapping[str, Any]],
    ) -> dict[str, Any]:
        """Assemble the generate_content arguments for one turn."""
        contents = [_to_content(turn) for turn in prior_turns]
        contents.append({"role": ChatRole.USER.value, "parts": [{"text": utterance}]})
        return {
            "model": self.model,
            "contents": contents,
            "config": {
                "system_instruction": self.system_instruction,
                "temperature": self.temperature,
            },
        }

    def send_turn(
        self,
        utterance: str,
        prior_turns: Iterable[ChatMessage | Mapping[str, Any]] = (),
    ) -> str:
        """Return the model reply, or a fixed fallback text on any failure."""
        client = self.get_client()
        if client is None:
            return CHAT_CONFIG_ERROR

        try:
            response = client.models.generate_content(
                **self.build_request(utterance, prior_turns)
            )
            return response.text or CHAT_EMPTY_REPLY
        except Exception as e:
            logger.error(f"Gemini API Error: {e}")
            return CHAT_TRANSPORT_ERROR


class ChatSession:
    """The chat widget's conversation and visibility state."""

    def __init__(self, greeting: str = CHAT_GREETING) -> None:
        """Initialize a closed widget holding only the greeting."""
        self.messages: list[ChatMessage] = [
            ChatMessage(role=ChatRole.MODEL, text=greeting)
        ]
        self.is_open = False
        self.busy = False
        self._lock = threading.Lock()

    def open(self) -> None:
        """Show the widget."""
        self.is_open = True

    def close(self) -> None:
        """Hide the widget; an in-flight send still completes."""
        self.is_open = False

    def send(self, utterance: str, bridge: AdvisoryChatBridge) -> str | None:
        """Send one utterance, returning the reply or None if rejected.

        Blank input and sends made while another is outstanding are rejected
        without touching the conversation.
        """
        if not utterance or not utterance.strip():
            return None
        with self._lock:
            if self.busy:
                logger.info("Chat send rejected while a reply is pending")
                return None
            self.busy = True
            prior_turns = list(self.messages)
            self.messages.append(ChatMessage(role=ChatRole.USER, text=utterance))

        reply = CHAT_WIDGET_ERROR
        try:
            reply = bridge.send_turn(utterance, prior_turns)
        except Exception:
            logger.exception("Chat bridge raised unexpectedly")
        finally:
            with self._lock:
                self.messages.append(ChatMessage(role=ChatRole.MODEL, text=reply))
                self.busy = False
        return reply

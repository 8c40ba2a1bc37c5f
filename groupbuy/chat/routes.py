"""Routes for the chat blueprint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app, flash, jsonify, redirect, request, url_for

from groupbuy.core.context import current_storefront
from groupbuy.core.types import APIResponse

from . import bp
from .forms import ChatForm

if TYPE_CHECKING:
    from flask import Response

    from .services import ChatSession


def _transcript(chat: ChatSession) -> dict[str, Any]:
    """Serialize the conversation for the widget."""
    return {
        "messages": [
            {"role": message.role.value, "text": message.text}
            for message in chat.messages
        ],
        "busy": chat.busy,
    }


@bp.route("/open", methods=["POST"])
def open_chat() -> Response:
    """Show the chat widget."""
    current_storefront().chat.open()
    return redirect(url_for("main.index"))


@bp.route("/close", methods=["POST"])
def close_chat() -> Response:
    """Hide the chat widget."""
    current_storefront().chat.close()
    return redirect(url_for("main.index"))


@bp.route("/messages", methods=["GET"])
def messages() -> Response:
    """Return the conversation so far."""
    chat = current_storefront().chat
    payload: APIResponse = {"success": True, "message": "", "data": _transcript(chat)}
    return jsonify(payload)


@bp.route("/send", methods=["POST"])
def send() -> Response | tuple[Response, int]:
    """Forward one message to the advisor and record the reply."""
    chat = current_storefront().chat
    chat.open()
    form = ChatForm()
    reply = None
    if form.validate_on_submit():
        advisor = current_app.extensions["advisor"]
        reply = chat.send(form.message.data, advisor)

    if request.is_json:
        if reply is None:
            payload: APIResponse = {
                "success": False,
                "message": "请输入问题，或等待上一条回复。",
                "data": _transcript(chat),
            }
            return jsonify(payload), 409 if chat.busy else 400
        payload = {"success": True, "message": reply, "data": _transcript(chat)}
        return jsonify(payload)

    if reply is None:
        flash("请输入问题，或等待上一条回复。", "warning")
    return redirect(url_for("main.index", _anchor="chat"))

"""Routes for the main blueprint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app, flash, redirect, render_template, url_for

from groupbuy.chat.forms import ChatForm
from groupbuy.core.context import current_storefront, reset_storefront
from groupbuy.core.types import View
from groupbuy.group.services import card_for, detail_for

from . import bp

if TYPE_CHECKING:
    from flask import Response


@bp.route("/", methods=["GET"])
def index() -> str:
    """Render whichever screen the visitor's session is on."""
    storefront = current_storefront()
    controller = storefront.controller
    chat_context = {"chat": storefront.chat, "chat_form": ChatForm()}
    view = controller.view

    if view is View.SUCCESS:
        return render_template(
            "success.html", confirmation=controller.confirmation, **chat_context
        )

    if view is View.GROUP_DETAIL:
        group = controller.active_group
        if group is not None:
            return render_template(
                "group_detail.html",
                detail=detail_for(group),
                pending_success=controller.pending_success,
                refresh_after=controller.success_remaining,
                **chat_context,
            )
        current_app.logger.warning(
            f"Group {controller.active_group_id} not found; detail not rendered"
        )
        flash("拼团不存在或已结束。", "warning")
        controller.back()

    cards = [card_for(group) for group in controller.open_groups()]
    return render_template("home.html", cards=cards, **chat_context)


@bp.route("/reset", methods=["POST"])
def reset() -> Response:
    """Discard everything and start over on the home screen."""
    reset_storefront()
    return redirect(url_for(".index"))

"""Routes for the group blueprint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import jsonify, redirect, url_for

from groupbuy.core.context import current_storefront
from groupbuy.core.types import APIResponse
from groupbuy.errors import GroupNotFound

from . import bp

if TYPE_CHECKING:
    from flask import Response


@bp.route("/create", methods=["POST"])
def create_group() -> Response:
    """Start a new group led by the visitor."""
    current_storefront().controller.create_group()
    return redirect(url_for("main.index"))


@bp.route("/<string:group_id>/select", methods=["POST"])
def select_group(group_id: str) -> Response:
    """Open a group's detail screen."""
    current_storefront().controller.select_group(group_id)
    return redirect(url_for("main.index"))


@bp.route("/back", methods=["POST"])
def back() -> Response:
    """Leave the detail screen for the home listing."""
    current_storefront().controller.back()
    return redirect(url_for("main.index"))


@bp.route("/<string:group_id>/join", methods=["POST"])
def join_group(group_id: str) -> Response:
    """Join a group; the success screen follows after a short delay."""
    current_storefront().controller.confirm_join(group_id)
    return redirect(url_for("main.index"))


@bp.route("/<string:group_id>", methods=["GET"])
def group_state(group_id: str) -> Response | tuple[Response, int]:
    """Return one group's membership and status."""
    try:
        group = current_storefront().controller.get_group(group_id)
    except GroupNotFound as e:
        error: APIResponse = {"success": False, "message": e.message, "data": None}
        return jsonify(error), e.status_code
    payload: APIResponse = {
        "success": True,
        "message": "",
        "data": {
            "id": group.id,
            "creator": group.creator.name,
            "members": [member.name for member in group.members],
            "max_members": group.max_members,
            "missing": group.missing,
            "status": group.status.value,
            "expires_at": group.expires_at,
        },
    }
    return jsonify(payload)

"""Core data types for the groupbuy application."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, TypedDict  # noqa: UP035


class View(str, Enum):
    """The screens the storefront can show."""

    HOME = "HOME"
    GROUP_DETAIL = "GROUP_DETAIL"
    SUCCESS = "SUCCESS"


class APIResponse(TypedDict):
    """Generic API response structure."""

    success: bool
    message: str
    data: Optional[Dict[str, Any]]  # noqa: UP006

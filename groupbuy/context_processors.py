"""Context processors for the Flask application."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any

from flask import current_app

from .group.seed import COURSE


def inject_global_context() -> dict[str, Any]:
    """Injects global context variables into templates."""
    return {
        "current_year": datetime.now().year,
        "app_version": os.environ.get("APP_VERSION", "dev"),
        "course": COURSE,
        "is_testing": current_app.config.get("TESTING", False),
    }

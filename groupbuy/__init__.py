"""Initialize the Flask app and its extensions."""

import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from .constants import (
    CHAT_TEMPERATURE,
    CONSULTANT_WECHAT_ID,
    GEMINI_MODEL,
    JOIN_REDIRECT_DELAY,
    MAX_SESSIONS,
    SESSION_IDLE_TIMEOUT,
)
from .extensions import advisor, csrf, sessions


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(
        __name__,
        instance_relative_config=True,
        static_folder="static",
        static_url_path="/static",
    )

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        GEMINI_API_KEY=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY"),
        GEMINI_MODEL=os.environ.get("GEMINI_MODEL") or GEMINI_MODEL,
        CHAT_TEMPERATURE=float(os.environ.get("CHAT_TEMPERATURE") or CHAT_TEMPERATURE),
        JOIN_REDIRECT_DELAY=float(
            os.environ.get("JOIN_REDIRECT_DELAY") or JOIN_REDIRECT_DELAY
        ),
        CONSULTANT_WECHAT_ID=os.environ.get("CONSULTANT_WECHAT_ID")
        or CONSULTANT_WECHAT_ID,
        SESSION_IDLE_TIMEOUT=float(
            os.environ.get("SESSION_IDLE_TIMEOUT") or SESSION_IDLE_TIMEOUT
        ),
        MAX_SESSIONS=int(os.environ.get("MAX_SESSIONS") or MAX_SESSIONS),
    )

    if test_config:
        app.config.update(test_config)

    if not app.config.get("GEMINI_API_KEY"):
        app.logger.warning("No Gemini API key configured; chat replies will fail.")

    # Initialize extensions
    csrf.init_app(app)
    sessions.init_app(app)
    advisor.init_app(app)

    # Register blueprints
    from . import main as main_bp

    app.register_blueprint(main_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import chat as chat_bp

    app.register_blueprint(chat_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    from .context_processors import inject_global_context

    app.context_processor(inject_global_context)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app

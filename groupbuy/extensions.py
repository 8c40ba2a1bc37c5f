"""Flask extensions for the application."""
from flask_wtf.csrf import CSRFProtect

from .chat.services import AdvisoryChatBridge
from .core.session_store import SessionRegistry

csrf = CSRFProtect()
sessions = SessionRegistry()
advisor = AdvisoryChatBridge()

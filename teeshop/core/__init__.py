# Core modules

from .config import settings, get_settings, Settings
from .session import SessionManager, CheckoutSession, session_manager

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "SessionManager",
    "CheckoutSession",
    "session_manager",
]

"""Browser session, navigation and scrolling primitives."""

from .session import BrowserSessionManager, Session
from .navigation import goto
from .scroll import auto_scroll

__all__ = ['BrowserSessionManager', 'Session', 'goto', 'auto_scroll']

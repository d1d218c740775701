"""
Authentication and session management modules.
"""
from src.auth.browser_manager import BrowserManager
from src.auth.cookie_manager import CookieManager

__all__ = ["CookieManager", "BrowserManager"]

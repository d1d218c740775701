"""
Resolution of the account handle the agent acts on behalf of.
"""
from typing import Optional

from src.context.view import ViewContext
from src.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_username(raw: Optional[str]) -> str:
    """
    Normalize a handle for comparison: trimmed, leading "@" removed, lowercased.

    Args:
        raw: Raw handle (may be None or empty)

    Returns:
        Normalized handle, empty string when unknown
    """
    value = (raw or "").strip()
    if value.startswith("@"):
        value = value[1:]
    return value.lower()


class IdentityResolver:
    """Resolves the current user's handle from configuration or the page URL."""

    def __init__(self, view: ViewContext, configured: Optional[str] = None):
        """
        Initialize IdentityResolver.

        Args:
            view: ViewContext for the page being watched
            configured: Handle from configuration; takes precedence when set
        """
        self.view = view
        self.configured = (configured or "").strip()
        self.captured: Optional[str] = None

    def capture(self) -> Optional[str]:
        """
        Remember the handle of the with_replies page currently shown.

        A configured handle is never overridden. The captured handle survives
        navigation away from the replies view.

        Returns:
            The captured handle, or None if nothing has been captured yet
        """
        if self.configured:
            return self.captured

        handle = self.view.profile_handle()
        if handle and handle != self.captured:
            logger.info(f"Captured username @{handle} from page URL")
            self.captured = handle
        return self.captured

    def get_username(self) -> str:
        """
        Get the raw handle (may carry a leading "@").

        Returns:
            Handle string, empty when unknown
        """
        if self.configured:
            return self.configured
        return self.captured or ""

    __call__ = get_username

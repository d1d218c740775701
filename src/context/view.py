"""
View detection and URL building for the profile replies timeline.
"""
from typing import Optional
from urllib.parse import urlparse

from config import settings
from src.utils.logging import get_logger

logger = get_logger(__name__)


def parse_pathname(url: str) -> str:
    """
    Extract the lowercased path component of a URL.

    Args:
        url: Absolute or relative URL

    Returns:
        Path string (always starts with "/")
    """
    path = urlparse(url or "").path or "/"
    return path.lower()


def build_with_replies_url(username: str, base_url: Optional[str] = None) -> str:
    """
    Build the with_replies timeline URL for a profile.

    Args:
        username: Profile handle, with or without a leading "@"
        base_url: Site root (defaults to settings.X_BASE_URL)

    Returns:
        Complete URL string

    Raises:
        ValueError: If username is empty
    """
    handle = (username or "").strip().lstrip("@")
    if not handle:
        raise ValueError("Username cannot be empty")

    url = f"{(base_url or settings.X_BASE_URL).rstrip('/')}/{handle}{settings.WITH_REPLIES_SUFFIX}"
    logger.debug(f"Built URL: {url}")
    return url


class ViewContext:
    """Reports which timeline the page is currently showing."""

    def __init__(self, page):
        """
        Initialize ViewContext.

        Args:
            page: Playwright Page object (only its url is read)
        """
        self.page = page

    def pathname(self) -> str:
        return parse_pathname(self.page.url)

    def is_with_replies(self) -> bool:
        """
        Check if the page shows a profile's with_replies timeline.

        Returns:
            True if the path ends with /with_replies
        """
        return self.pathname().rstrip("/").endswith(settings.WITH_REPLIES_SUFFIX)

    def profile_handle(self) -> Optional[str]:
        """
        Get the profile handle from a with_replies URL.

        Returns:
            Lowercased handle or None when not on a with_replies page
        """
        if not self.is_with_replies():
            return None

        segments = [segment for segment in self.pathname().split("/") if segment]
        if len(segments) != 2:
            return None
        return segments[0]

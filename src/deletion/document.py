"""
Async document query interface over a Playwright page.
"""
from typing import Any, List, Optional

from playwright.async_api import ElementHandle, Page

from config import settings

# offsetWidth/offsetHeight are zero for display:none; client rects catch inline boxes
VISIBILITY_SCRIPT = (
    "el => Boolean(el.offsetWidth || el.offsetHeight || el.getClientRects().length)"
)


class PageDocument:
    """Element lookup, inspection and clicks against the live page."""

    def __init__(self, page: Page, click_timeout: int = settings.CLICK_TIMEOUT_MS):
        """
        Initialize PageDocument.

        Args:
            page: Playwright async Page object
            click_timeout: Timeout for click actions in milliseconds
        """
        self.page = page
        self.click_timeout = click_timeout

    async def query_all(self, selector: str, root: Optional[Any] = None) -> List[ElementHandle]:
        """
        Find all elements matching selector, in document order.

        Args:
            selector: CSS selector
            root: Optional element to scope the search to (defaults to the page)

        Returns:
            List of element handles (possibly empty)
        """
        scope = root if root is not None else self.page
        return await scope.query_selector_all(selector)

    async def query(self, selector: str, root: Optional[Any] = None) -> Optional[ElementHandle]:
        scope = root if root is not None else self.page
        return await scope.query_selector(selector)

    async def is_visible(self, element: Optional[ElementHandle]) -> bool:
        """
        Check whether an element occupies rendered space.

        Args:
            element: Element handle or None

        Returns:
            True if the element has a non-zero size or at least one client rect
        """
        if element is None:
            return False
        return bool(await element.evaluate(VISIBILITY_SCRIPT))

    async def get_attribute(self, element: ElementHandle, name: str) -> str:
        return (await element.get_attribute(name)) or ""

    async def inner_text(self, element: ElementHandle) -> str:
        return (await element.inner_text()) or ""

    async def click(self, element: ElementHandle) -> None:
        await element.click(timeout=self.click_timeout)

"""
Browser manager for creating authenticated browser sessions with stealth configuration.
"""
from pathlib import Path
from typing import Optional, Tuple

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from config import settings
from src.auth.cookie_manager import CookieManager
from src.stealth.fingerprint import apply_stealth_patches, create_stealth_context, get_browser_args
from src.utils.logging import get_logger

logger = get_logger(__name__)


class BrowserManager:
    """High-level interface for creating authenticated browser sessions."""

    def __init__(self, cookie_path: Optional[Path] = None, logger_instance=None):
        """
        Initialize BrowserManager.

        Args:
            cookie_path: Path to cookies.json file (defaults to settings.X_COOKIES_PATH)
            logger_instance: Optional logger instance (uses module logger if None)
        """
        self.cookie_path = Path(cookie_path or settings.X_COOKIES_PATH)
        self.logger = logger_instance or logger
        self.cookie_manager = CookieManager(self.cookie_path)
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def create_authenticated_browser(
        self, headless: Optional[bool] = None
    ) -> Tuple[Browser, BrowserContext, Page]:
        """
        Create an authenticated browser session with stealth configuration.

        Args:
            headless: Run browser in headless mode (defaults to settings.HEADLESS)

        Returns:
            Tuple of (Browser, BrowserContext, Page)

        Raises:
            FileNotFoundError: If cookie file doesn't exist
            ValueError: If cookies are invalid
            RuntimeError: If browser creation fails
        """
        headless = headless if headless is not None else settings.HEADLESS

        try:
            self.logger.info("Step 1: Loading cookies...")
            self.cookie_manager.load_cookies()

            all_present, missing = self.cookie_manager.check_required_cookies()
            if not all_present:
                raise ValueError(
                    f"Missing required cookies: {missing}\n"
                    "Please re-export your X session cookies."
                )

            self.logger.info("Cookies loaded and validated successfully")

            self.logger.info("Step 2: Launching browser...")
            self.playwright = await async_playwright().start()

            browser_args = get_browser_args()
            self.logger.debug(f"Browser args: {browser_args}")

            self.browser = await self.playwright.chromium.launch(
                headless=headless, args=browser_args
            )
            self.logger.info(f"Browser launched (headless={headless})")

            self.logger.info("Step 3: Creating stealth context with cookies...")
            self.context = await create_stealth_context(self.browser, cookies_path=self.cookie_path)

            self.logger.info("Step 4: Creating page and applying stealth patches...")
            self.page = await self.context.new_page()
            await apply_stealth_patches(self.page)

            self.logger.info("Authenticated browser session created successfully")
            return self.browser, self.context, self.page

        except FileNotFoundError as e:
            self.logger.error(f"Cookie file not found: {e}")
            await self.cleanup()
            raise
        except ValueError as e:
            self.logger.error(f"Cookie validation error: {e}")
            await self.cleanup()
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error creating browser: {e}")
            await self.cleanup()
            raise RuntimeError(f"Failed to create authenticated browser: {e}") from e

    async def cleanup(self) -> None:
        """Clean up browser resources."""
        try:
            if self.page:
                await self.page.close()
                self.page = None
                self.logger.debug("Page closed")
        except Exception as e:
            self.logger.debug(f"Error closing page: {e}")

        try:
            if self.context:
                await self.context.close()
                self.context = None
                self.logger.debug("Context closed")
        except Exception as e:
            self.logger.debug(f"Error closing context: {e}")

        try:
            if self.browser:
                await self.browser.close()
                self.browser = None
                self.logger.debug("Browser closed")
        except Exception as e:
            self.logger.debug(f"Error closing browser: {e}")

        try:
            if self.playwright:
                await self.playwright.stop()
                self.playwright = None
                self.logger.debug("Playwright stopped")
        except Exception as e:
            self.logger.debug(f"Error stopping playwright: {e}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()
        return False

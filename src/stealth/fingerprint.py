"""
Stealth configuration module for browser fingerprint masking and anti-detection.
"""
from pathlib import Path
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page
from playwright_stealth import stealth_async

from config import settings
from src.utils.logging import get_logger

logger = get_logger(__name__)


def get_browser_args() -> list[str]:
    """
    Get browser launch arguments for stealth mode.

    Returns:
        List of browser launch arguments
    """
    args = [
        "--disable-blink-features=AutomationControlled",
        "--disable-dev-shm-usage",
    ]
    return args


def get_context_options(cookies_path: Optional[Path] = None) -> dict:
    """
    Get browser context options for stealth configuration.

    Args:
        cookies_path: Optional path to cookies.json file for storage_state

    Returns:
        Dictionary of context options
    """
    options = {
        # Desktop layout; the caret menu and confirmation sheet differ on mobile
        "viewport": {"width": 1280, "height": 900},
        "user_agent": settings.USER_AGENT,
        "locale": "en-US",
        "timezone_id": "America/New_York",
        "permissions": [],
        "color_scheme": "light",
    }

    if cookies_path and cookies_path.exists():
        options["storage_state"] = str(cookies_path)
        logger.debug(f"Using storage_state from: {cookies_path}")

    return options


async def create_stealth_context(
    browser: Browser, cookies_path: Optional[Path] = None, **extra_options
) -> BrowserContext:
    """
    Create a browser context with stealth configuration.

    Args:
        browser: Playwright Browser instance
        cookies_path: Optional path to cookies.json for storage_state
        **extra_options: Additional context options to merge

    Returns:
        Configured BrowserContext with stealth settings
    """
    logger.info("Creating stealth browser context...")

    context_options = get_context_options(cookies_path)
    context_options.update(extra_options)

    logger.debug(
        f"Context options: viewport={context_options['viewport']}, "
        f"user_agent={context_options['user_agent'][:50]}..."
    )

    context = await browser.new_context(**context_options)

    logger.info("Stealth context created successfully")
    return context


async def apply_stealth_patches(page: Page) -> None:
    """
    Apply playwright-stealth patches to a page.

    Args:
        page: Playwright Page object to patch
    """
    try:
        logger.debug("Applying stealth patches to page...")
        await stealth_async(page)
        logger.debug("Stealth patches applied successfully")
    except Exception as e:
        # Launch args and context options still apply without the patches
        logger.warning(f"Failed to apply stealth patches: {e}")

"""
Cookie management module for loading and validating X session cookies.
"""
import json
from pathlib import Path
from typing import Optional

from src.utils.logging import get_logger

logger = get_logger(__name__)

# Session cookies X needs to treat the browser as logged in
REQUIRED_COOKIES = ["auth_token", "ct0"]


class CookieManager:
    """Loads an exported Playwright storage state and checks the session cookies."""

    def __init__(self, cookie_path: Path):
        """
        Initialize CookieManager with path to cookie file.

        Args:
            cookie_path: Path to cookies.json file
        """
        self.cookie_path = Path(cookie_path)
        self.cookies_data: Optional[dict] = None

    def load_cookies(self) -> dict:
        """
        Load cookies from JSON file.

        Returns:
            Dictionary containing cookies in Playwright storage_state format

        Raises:
            FileNotFoundError: If cookie file doesn't exist
            ValueError: If cookie file format is invalid
        """
        if not self.cookie_path.exists():
            raise FileNotFoundError(
                f"Cookie file not found: {self.cookie_path}\n"
                "Please export your X session cookies and save them to this location."
            )

        try:
            with open(self.cookie_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON format in cookie file: {self.cookie_path}\n"
                f"Error: {e}\n"
                'Expected format: {"cookies": [...], "origins": []}'
            ) from e

        if not self.validate_cookie_format(data):
            raise ValueError(
                f"Invalid cookie file format: {self.cookie_path}\n"
                'Expected structure: {"cookies": [{"name": ..., "value": ..., "domain": ..., "path": ...}], "origins": []}'
            )

        self.cookies_data = data
        logger.info(f"Successfully loaded cookies from {self.cookie_path}")
        return self.cookies_data

    def validate_cookie_format(self, cookies) -> bool:
        """
        Validate that cookies match Playwright storage state format.

        Args:
            cookies: Parsed cookie file content

        Returns:
            True if format is valid, False otherwise
        """
        if not isinstance(cookies, dict):
            logger.debug("Cookies data is not a dictionary")
            return False

        if not isinstance(cookies.get("cookies"), list):
            logger.debug("Missing or non-list 'cookies' key in cookie data")
            return False

        required_fields = ["name", "value", "domain", "path"]
        for i, cookie in enumerate(cookies["cookies"]):
            if not isinstance(cookie, dict):
                logger.debug(f"Cookie at index {i} is not a dictionary")
                return False

            missing = [name for name in required_fields if name not in cookie]
            if missing:
                logger.debug(f"Cookie at index {i} missing required fields: {missing}")
                return False

            if not all(isinstance(cookie[name], str) for name in required_fields):
                logger.debug(f"Cookie at index {i} has non-string field values")
                return False

        return True

    def check_required_cookies(self, cookies: Optional[dict] = None) -> tuple[bool, list[str]]:
        """
        Check if all required cookies are present.

        Args:
            cookies: Cookie data dictionary (uses self.cookies_data if None)

        Returns:
            Tuple of (all_present: bool, missing_cookies: list[str])
        """
        if cookies is None:
            cookies = self.cookies_data

        if not cookies or "cookies" not in cookies:
            logger.warning("No cookie data available for validation")
            return False, REQUIRED_COOKIES.copy()

        cookie_names = {cookie.get("name") for cookie in cookies["cookies"]}
        missing = [name for name in REQUIRED_COOKIES if name not in cookie_names]

        if missing:
            logger.warning(f"Missing required cookies: {missing}")
            return False, missing

        return True, []

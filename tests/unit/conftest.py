"""
Pytest configuration and shared fixtures for unit tests.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

# Note: pytest_plugins is defined in the root tests/conftest.py
# to comply with pytest's requirement that it be at the top level


@pytest.fixture
def mock_page():
    """
    Create a mock Playwright async Page object.

    Includes commonly used attributes and methods:
    - url: Page URL (default: "https://x.com/alice/with_replies")
    - query_selector_all(): Returns no elements
    - query_selector(): Returns None
    - goto(): Navigate to URL (returns None)

    Tests can override any attribute or method as needed.
    """
    page = MagicMock()
    page.url = "https://x.com/alice/with_replies"
    page.query_selector_all = AsyncMock(return_value=[])
    page.query_selector = AsyncMock(return_value=None)
    page.goto = AsyncMock(return_value=None)
    page.close = AsyncMock(return_value=None)
    return page


@pytest.fixture
def mock_element():
    """
    Create a mock Playwright ElementHandle.

    evaluate() reports the element as visible; get_attribute() and
    inner_text() return empty values.
    """
    element = MagicMock()
    element.evaluate = AsyncMock(return_value=True)
    element.get_attribute = AsyncMock(return_value=None)
    element.inner_text = AsyncMock(return_value="")
    element.click = AsyncMock(return_value=None)
    element.query_selector_all = AsyncMock(return_value=[])
    element.query_selector = AsyncMock(return_value=None)
    return element


@pytest.fixture
def temp_cookie_file(tmp_path):
    """
    Create a temporary cookie file path for testing.

    The file is not created by default - tests can write to it as needed.

    Args:
        tmp_path: Pytest's temporary directory fixture

    Returns:
        Path object pointing to the temporary cookie file
    """
    return tmp_path / "cookies.json"

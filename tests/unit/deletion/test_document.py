"""
Unit tests for PageDocument over mocked Playwright objects.
"""
from unittest.mock import AsyncMock

import pytest

from src.deletion.document import VISIBILITY_SCRIPT, PageDocument


@pytest.mark.unit
class TestPageDocument:
    """Test PageDocument delegation to Playwright."""

    @pytest.mark.asyncio
    async def test_query_all_on_page(self, mock_page, mock_element):
        mock_page.query_selector_all.return_value = [mock_element]
        document = PageDocument(mock_page)

        assert await document.query_all("article") == [mock_element]
        mock_page.query_selector_all.assert_awaited_once_with("article")

    @pytest.mark.asyncio
    async def test_query_scoped_to_root(self, mock_page, mock_element):
        child = AsyncMock()
        mock_element.query_selector.return_value = child
        document = PageDocument(mock_page)

        assert await document.query("button", root=mock_element) is child
        mock_element.query_selector.assert_awaited_once_with("button")
        mock_page.query_selector.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_is_visible(self, mock_page, mock_element):
        document = PageDocument(mock_page)

        assert await document.is_visible(mock_element) is True
        mock_element.evaluate.assert_awaited_once_with(VISIBILITY_SCRIPT)

        mock_element.evaluate.return_value = False
        assert await document.is_visible(mock_element) is False

    @pytest.mark.asyncio
    async def test_none_is_not_visible(self, mock_page):
        assert await PageDocument(mock_page).is_visible(None) is False

    @pytest.mark.asyncio
    async def test_missing_attribute_is_empty(self, mock_page, mock_element):
        document = PageDocument(mock_page)

        assert await document.get_attribute(mock_element, "href") == ""
        mock_element.get_attribute.return_value = "/alice"
        assert await document.get_attribute(mock_element, "href") == "/alice"

    @pytest.mark.asyncio
    async def test_inner_text(self, mock_page, mock_element):
        mock_element.inner_text.return_value = "Delete"
        assert await PageDocument(mock_page).inner_text(mock_element) == "Delete"

    @pytest.mark.asyncio
    async def test_click_uses_timeout(self, mock_page, mock_element):
        await PageDocument(mock_page, click_timeout=1234).click(mock_element)

        mock_element.click.assert_awaited_once_with(timeout=1234)

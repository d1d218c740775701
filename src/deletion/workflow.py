"""
Three-step deletion workflow: open the post menu, pick Delete, confirm.
"""
import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from src.deletion.agent_config import AgentConfig
from src.utils.logging import get_logger

logger = get_logger(__name__)


class InteractionStep(Enum):
    """Steps of the deletion workflow."""

    OPEN_MENU = "open-menu"
    SELECT_DELETE = "select-delete"
    CONFIRM_DELETE = "confirm-delete"

    @property
    def failure_message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES = {
    InteractionStep.OPEN_MENU: "Caret button not found",
    InteractionStep.SELECT_DELETE: "Delete menu item not clicked",
    InteractionStep.CONFIRM_DELETE: "Confirm delete button not found",
}

SUCCESS_MESSAGE = "Flagged post deleted"


class DeletionWorkflow:
    """
    Drives the menu/delete/confirm interaction against one post.

    Each step polls with its own bounded attempt budget, so a step that never
    becomes ready fails instead of hanging. Exceptions raised by the page are
    not caught here.
    """

    def __init__(
        self,
        document,
        config: Optional[AgentConfig] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        """
        Initialize DeletionWorkflow.

        Args:
            document: Document query interface (see PageDocument)
            config: Optional AgentConfig (defaults from settings)
            sleep: Coroutine function taking seconds (defaults to asyncio.sleep)
        """
        self.document = document
        self.config = config or AgentConfig()
        self.sleep = sleep or asyncio.sleep

    async def run(self, target) -> tuple[bool, str]:
        """
        Execute the deletion flow for a post.

        Args:
            target: Post element returned by TargetSelector

        Returns:
            Tuple of (success: bool, message: str)
        """
        caret = await self.find_caret_with_retry(target)
        if caret is None:
            return self._fail(InteractionStep.OPEN_MENU)

        logger.debug("Clicking caret button")
        await self.document.click(caret)
        await self.delay(self.config.wait_between_steps_ms)

        if not await self.try_click_delete_menu_item():
            return self._fail(InteractionStep.SELECT_DELETE)

        if not await self.try_confirm_delete():
            return self._fail(InteractionStep.CONFIRM_DELETE)

        # Let the timeline drop the post before the next scan
        await self.delay(self.config.wait_after_delete_ms)
        return True, SUCCESS_MESSAGE

    async def find_caret_with_retry(
        self,
        target,
        max_retries: Optional[int] = None,
        delay_ms: Optional[int] = None,
    ) -> Optional[Any]:
        """
        Poll the post for a visible "More" button.

        Selectors are tried in configured priority order on every attempt.

        Args:
            target: Post element
            max_retries: Attempt budget (defaults to config.caret_attempts)
            delay_ms: Delay between attempts (defaults to config.caret_delay_ms)

        Returns:
            Caret element or None once the budget is exhausted
        """
        max_retries = self.config.caret_attempts if max_retries is None else max_retries
        delay_ms = self.config.caret_delay_ms if delay_ms is None else delay_ms

        for attempt in range(max_retries):
            for selector in self.config.caret_selectors:
                caret = await self.document.query(selector, root=target)
                if await self.document.is_visible(caret):
                    logger.debug(f"Caret found with '{selector}' on attempt {attempt + 1}")
                    return caret
            await self.delay(delay_ms)
        return None

    async def try_click_delete_menu_item(self) -> bool:
        """
        Click the Delete entry of the open menu, backing off linearly.

        Returns:
            True if a Delete entry was clicked
        """
        label = self.config.delete_label.lower()
        for attempt in range(self.config.menu_attempts):
            await self.delay(self.config.wait_between_steps_ms * (attempt + 1))
            menu_items = await self.document.query_all(self.config.menuitem_selector)
            for item in menu_items:
                text = (await self.document.inner_text(item)).lower()
                if label in text:
                    logger.debug(f"Clicking menu item '{text.strip()}'")
                    await self.document.click(item)
                    return True
        return False

    async def try_confirm_delete(self) -> bool:
        for attempt in range(self.config.confirm_attempts):
            await self.delay(self.config.wait_between_steps_ms * (attempt + 1))
            confirm_button = await self.document.query(self.config.confirm_selector)
            if await self.document.is_visible(confirm_button):
                logger.debug("Clicking confirmation button")
                await self.document.click(confirm_button)
                return True
        return False

    async def delay(self, ms: int) -> None:
        await self.sleep(ms / 1000)

    def _fail(self, step: InteractionStep) -> tuple[bool, str]:
        message = step.failure_message
        logger.warning(f"[AutoDelete] {message}")
        return False, message

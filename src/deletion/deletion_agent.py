"""
Deletion agent: lifecycle, polling and status reporting for flagged reply cleanup.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import Page

from src.context.identity import normalize_username
from src.deletion.agent_config import AgentConfig
from src.deletion.document import PageDocument
from src.deletion.scheduler import PollScheduler
from src.deletion.status import (
    AgentState,
    StatusSnapshot,
    compose_message,
    unavailable_reason,
)
from src.deletion.target_selector import TargetSelector
from src.deletion.workflow import DeletionWorkflow
from src.utils.events import EVENTS, EventBus
from src.utils.logging import get_logger

logger = get_logger(__name__)


class DeletionAgent:
    """
    Scans the replies timeline for flagged posts and deletes the user's own.

    All methods run on one event loop. The busy flag keeps at most one
    deletion in flight; stop() and destroy() never interrupt it.
    """

    def __init__(
        self,
        page: Optional[Page] = None,
        *,
        get_username: Callable[[], Optional[str]],
        is_with_replies: Callable[[], bool],
        get_pathname: Optional[Callable[[], str]] = None,
        document=None,
        event_bus: Optional[EventBus] = None,
        config: Optional[AgentConfig] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        logger_instance=None,
    ):
        """
        Initialize DeletionAgent.

        Args:
            page: Playwright async Page (used when no document is given)
            get_username: Returns the raw handle of the active user
            is_with_replies: Reports whether the page shows a with_replies timeline
            get_pathname: Optional current URL path, used to require the user's own profile
            document: Optional document query interface (defaults to PageDocument(page))
            event_bus: Optional EventBus for status events
            config: Optional AgentConfig (defaults from settings)
            sleep: Optional coroutine function for workflow delays
            logger_instance: Optional logger instance
        """
        self.config = config or AgentConfig()
        if document is None:
            if page is None:
                raise ValueError("Either page or document must be provided")
            document = PageDocument(page, click_timeout=self.config.click_timeout_ms)
        self.document = document
        self.get_username = get_username
        self.is_with_replies = is_with_replies
        self.get_pathname = get_pathname
        self.event_bus = event_bus or EventBus()
        self.logger = logger_instance or logger

        self.state = AgentState()
        self.selector = TargetSelector(self.document, get_username, self.config)
        self.workflow = DeletionWorkflow(self.document, self.config, sleep=sleep)
        self.scheduler = PollScheduler(self.run_cycle, self.config.scan_interval_ms)

    def handle_toggle(self, enabled: bool) -> None:
        if enabled:
            self.start()
        else:
            self.stop()

    def start(self) -> None:
        """
        Start scanning, or record why scanning is not possible.

        Must be called with an event loop running; the first scan cycle is
        scheduled right away instead of waiting for the first tick.
        """
        if self.state.running:
            return
        if not self.can_operate():
            self.state.last_error = self.get_unavailable_reason()
            self.publish_status()
            return

        self.state.running = True
        self.state.deleted_count = 0
        self.state.last_error = None
        self.logger.info(f"[AutoDelete] Started for @{self.get_normalized_username()}")
        self.scheduler.arm()
        self.publish_status()
        self.scheduler.spawn()

    def stop(self, reason: Optional[str] = None) -> None:
        """
        Stop scanning.

        While idle this only records the reason, so observers can still see
        why the agent is unavailable.

        Args:
            reason: Optional reason stored as the last error
        """
        if not self.state.running:
            self.state.last_error = reason or self.state.last_error
            self.publish_status()
            return

        self.state.running = False
        if reason:
            self.state.last_error = reason
        self.scheduler.disarm()
        self.logger.info("[AutoDelete] Stopped")
        self.publish_status()

    def destroy(self) -> None:
        self.scheduler.disarm()

    async def wait_idle(self) -> None:
        """Wait for scan cycles already in flight, e.g. before closing the browser."""
        await self.scheduler.wait_for_cycles()

    def on_context_change(self) -> None:
        """Re-check availability after navigation and stop if it was lost."""
        if self.state.running and not self.can_operate():
            self.stop(self.get_unavailable_reason())
            return
        self.publish_status()

    async def run_cycle(self) -> None:
        """
        Run one scan: pick at most one flagged post and try to delete it.

        Failures are recorded in the state and logged; nothing propagates.
        """
        if not self.state.running or self.state.busy:
            return
        if not self.can_operate():
            self.stop(self.get_unavailable_reason())
            return

        try:
            article = await self.selector.find_target()
        except Exception as e:
            self.logger.warning(f"[AutoDelete] Could not scan timeline: {e}")
            return
        if article is None:
            return
        # The scan awaited the page; the agent may have been stopped meanwhile
        if not self.state.running or self.state.busy:
            return

        self.state.busy = True
        self.publish_status()
        try:
            deleted, message = await self.workflow.run(article)
            if deleted:
                self.state.deleted_count += 1
                self.logger.info(f"[AutoDelete] Deleted flagged post #{self.state.deleted_count}")
            else:
                self.state.last_error = message
        except asyncio.CancelledError:
            raise
        except Exception as e:
            message = str(e) or type(e).__name__
            self.logger.error(f"[AutoDelete] Error deleting post: {message}")
            self.logger.debug("Deletion failure details", exc_info=True)
            self.state.last_error = message
        finally:
            self.state.busy = False
            self.publish_status()

    def can_operate(self) -> bool:
        return bool(self.get_normalized_username()) and self.is_on_replies_page()

    def is_on_replies_page(self) -> bool:
        """
        Check if the page shows the active user's own with_replies timeline.

        Returns:
            True if the agent may act on the current view
        """
        username = self.get_normalized_username()
        if not username or not self.is_with_replies():
            return False
        if self.get_pathname is None:
            return True
        pathname = (self.get_pathname() or "").lower()
        return pathname.startswith(f"/{username}/")

    def get_unavailable_reason(self) -> str:
        return unavailable_reason(self.get_normalized_username(), self.is_with_replies())

    def get_normalized_username(self) -> str:
        return normalize_username(self.get_username())

    def build_status(self) -> StatusSnapshot:
        """
        Assemble an immutable snapshot of the current state.

        Returns:
            StatusSnapshot
        """
        username = self.get_normalized_username()
        message = self.state.last_error or compose_message(
            username,
            self.is_with_replies(),
            deleting=self.state.busy,
            running=self.state.running,
            own_profile=self.is_on_replies_page(),
        )
        return StatusSnapshot(
            running=self.state.running,
            deleting=self.state.busy,
            deleted_count=self.state.deleted_count,
            username=username or None,
            can_run=self.can_operate(),
            message=message,
        )

    def publish_status(self) -> None:
        self.event_bus.emit(EVENTS.AUTO_DELETE_STATUS, self.build_status().to_dict())

"""
Recurring timer that spawns scan cycles on the running event loop.
"""
import asyncio
from typing import Awaitable, Callable, Optional

from src.utils.logging import get_logger

logger = get_logger(__name__)


class PollScheduler:
    """
    Fires a coroutine callback at a fixed interval.

    Every tick starts the callback as its own task without waiting for the
    previous one to finish; callers guard against overlap themselves.
    Disarming stops future ticks but leaves running callbacks alone.
    """

    def __init__(self, callback: Callable[[], Awaitable[None]], interval_ms: int):
        """
        Initialize PollScheduler.

        Args:
            callback: Coroutine function run on every tick
            interval_ms: Tick interval in milliseconds
        """
        self.callback = callback
        self.interval_ms = interval_ms
        self.handle: Optional[asyncio.Task] = None
        self._cycles: set = set()

    @property
    def armed(self) -> bool:
        return self.handle is not None

    def arm(self) -> None:
        """Start ticking. Must be called with an event loop running."""
        if self.handle is not None:
            return
        self.handle = asyncio.get_running_loop().create_task(self._tick_loop())
        logger.debug(f"Scheduler armed at {self.interval_ms}ms")

    def disarm(self) -> None:
        if self.handle is not None:
            self.handle.cancel()
            self.handle = None
            logger.debug("Scheduler disarmed")

    def spawn(self) -> asyncio.Task:
        """
        Run the callback once as an independent task.

        Returns:
            The created task
        """
        task = asyncio.get_running_loop().create_task(self.callback())
        self._cycles.add(task)
        task.add_done_callback(self._on_cycle_done)
        return task

    async def wait_for_cycles(self) -> None:
        """Wait until no spawned callback is still running."""
        while self._cycles:
            await asyncio.gather(*list(self._cycles), return_exceptions=True)

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_ms / 1000)
            self.spawn()

    def _on_cycle_done(self, task: asyncio.Task) -> None:
        self._cycles.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Scan cycle raised: {error!r}")

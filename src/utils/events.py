"""
In-process event bus used to publish agent status.
"""
import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from src.utils.logging import get_logger

logger = get_logger(__name__)


class EVENTS:
    """Event names published on the bus."""

    AUTO_DELETE_STATUS = "auto-delete-status"


@dataclass
class Event:
    type: str
    payload: Dict[str, Any]


class EventBus:
    """Fire-and-forget publisher; subscribers never acknowledge."""

    def __init__(self):
        self.subscribers: List[Callable[[Event], Any]] = []
        self._pending: set = set()

    def subscribe(self, callback: Callable[[Event], Any]) -> None:
        if callback not in self.subscribers:
            self.subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[Event], Any]) -> None:
        if callback in self.subscribers:
            self.subscribers.remove(callback)

    def emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        """
        Deliver an event to every subscriber.

        Coroutine subscribers are scheduled on the running loop. A subscriber
        that raises is logged and skipped so delivery to the others continues.

        Args:
            event_type: Event name (see EVENTS)
            payload: Event payload dictionary
        """
        event = Event(type=event_type, payload=payload)
        for callback in list(self.subscribers):
            if inspect.iscoroutinefunction(callback):
                try:
                    loop = asyncio.get_running_loop()
                except RuntimeError:
                    logger.debug(f"No running loop, dropping async subscriber for {event_type}")
                    continue
                task = loop.create_task(callback(event))
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)
                continue

            try:
                callback(event)
            except Exception as e:
                logger.warning(f"Subscriber {getattr(callback, '__name__', callback)} failed: {e}")

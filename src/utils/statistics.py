"""
Statistics and reporting utilities.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from src.utils.events import EVENTS, Event, EventBus
from src.utils.logging import get_logger

logger = get_logger(__name__)


class StatisticsReporter:
    """Aggregates agent status events into run statistics."""

    def __init__(self, event_bus: Optional[EventBus] = None, start_time: Optional[datetime] = None):
        """
        Initialize StatisticsReporter.

        Args:
            event_bus: Optional EventBus to subscribe to for status events
            start_time: Operation start time (defaults to now)
        """
        self.start_time = start_time or datetime.now()
        self.stats = {
            "total_deleted": 0,
            "attempts": 0,
            "failed_attempts": 0,
            "runs_started": 0,
        }
        self.last_status: Optional[Dict[str, Any]] = None
        if event_bus is not None:
            event_bus.subscribe(self.on_event)

    def on_event(self, event: Event) -> None:
        if event.type == EVENTS.AUTO_DELETE_STATUS:
            self.update_from_status(event.payload)

    def update_from_status(self, status: dict) -> None:
        """
        Update statistics from an agent status payload.

        Args:
            status: Payload from DeletionAgent.publish_status()
        """
        previous = self.last_status or {
            "running": False,
            "deleting": False,
            "deleted_count": 0,
        }

        if status.get("running") and not previous.get("running"):
            self.stats["runs_started"] += 1
            previous = {**previous, "deleted_count": 0}

        if status.get("deleting") and not previous.get("deleting"):
            self.stats["attempts"] += 1

        gained = status.get("deleted_count", 0) - previous.get("deleted_count", 0)
        if gained > 0:
            self.stats["total_deleted"] += gained

        # Attempt finished without the counter moving
        if previous.get("deleting") and not status.get("deleting") and gained <= 0:
            self.stats["failed_attempts"] += 1
            logger.debug(f"Deletion attempt failed: {status.get('message')}")

        self.last_status = dict(status)

    def print_summary(self) -> None:
        """Print final summary statistics."""
        elapsed = datetime.now() - self.start_time
        hours = elapsed.total_seconds() / 3600

        logger.info("=" * 60)
        logger.info("AUTO DELETE SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total Deleted: {self.stats['total_deleted']}")
        logger.info(f"Attempts: {self.stats['attempts']}")
        logger.info(f"Failed Attempts: {self.stats['failed_attempts']}")
        logger.info(f"Runs Started: {self.stats['runs_started']}")
        if self.last_status:
            logger.info(f"Last Status: {self.last_status.get('message')}")
        logger.info(f"Time Elapsed: {elapsed}")
        logger.info(
            f"Average Rate: {self.stats['total_deleted'] / max(hours, 0.01):.1f} items/hour"
        )
        logger.info("=" * 60)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current statistics.

        Returns:
            Statistics dictionary
        """
        elapsed = datetime.now() - self.start_time
        return {
            **self.stats,
            "last_message": (self.last_status or {}).get("message"),
            "start_time": self.start_time.isoformat(),
            "elapsed_time": str(elapsed),
            "elapsed_hours": elapsed.total_seconds() / 3600,
        }

"""
Tests for StatisticsReporter class.
"""
import logging
from datetime import datetime, timedelta

import pytest

from src.utils.events import EVENTS, EventBus
from src.utils.statistics import StatisticsReporter


def _status(running=True, deleting=False, deleted_count=0, message="Scanning"):
    return {
        "running": running,
        "deleting": deleting,
        "deleted_count": deleted_count,
        "username": "alice",
        "can_run": True,
        "message": message,
    }


@pytest.mark.unit
class TestStatisticsReporterInit:
    """Test StatisticsReporter.__init__() method."""

    def test_init_default_start_time(self):
        before_init = datetime.now()
        reporter = StatisticsReporter()

        assert before_init <= reporter.start_time <= datetime.now()

    def test_init_custom_start_time(self):
        custom_time = datetime(2024, 1, 1, 12, 0, 0)

        assert StatisticsReporter(start_time=custom_time).start_time == custom_time

    def test_counters_start_at_zero(self):
        reporter = StatisticsReporter()

        assert reporter.stats == {
            "total_deleted": 0,
            "attempts": 0,
            "failed_attempts": 0,
            "runs_started": 0,
        }
        assert reporter.last_status is None

    def test_subscribes_to_bus(self):
        bus = EventBus()
        reporter = StatisticsReporter(event_bus=bus)

        assert reporter.on_event in bus.subscribers


@pytest.mark.unit
class TestUpdateFromStatus:
    """Test StatisticsReporter.update_from_status() method."""

    def test_successful_attempt(self):
        reporter = StatisticsReporter()
        reporter.update_from_status(_status())
        reporter.update_from_status(_status(deleting=True))
        reporter.update_from_status(_status(deleted_count=1))

        assert reporter.stats["runs_started"] == 1
        assert reporter.stats["attempts"] == 1
        assert reporter.stats["total_deleted"] == 1
        assert reporter.stats["failed_attempts"] == 0

    def test_failed_attempt(self):
        """Test an attempt that ends without the counter moving counts as failed."""
        reporter = StatisticsReporter()
        reporter.update_from_status(_status())
        reporter.update_from_status(_status(deleting=True))
        reporter.update_from_status(_status(deleting=False))

        assert reporter.stats["attempts"] == 1
        assert reporter.stats["failed_attempts"] == 1
        assert reporter.stats["total_deleted"] == 0

    def test_total_survives_restart(self):
        """Test the agent's per-run counter resetting does not lose the total."""
        reporter = StatisticsReporter()
        reporter.update_from_status(_status(deleted_count=0))
        reporter.update_from_status(_status(deleted_count=2))
        reporter.update_from_status(_status(running=False, deleted_count=2, message="Ready"))
        reporter.update_from_status(_status(deleted_count=0))
        reporter.update_from_status(_status(deleted_count=1))

        assert reporter.stats["runs_started"] == 2
        assert reporter.stats["total_deleted"] == 3

    def test_repeated_status_changes_nothing(self):
        reporter = StatisticsReporter()
        reporter.update_from_status(_status(deleted_count=0))
        reporter.update_from_status(_status(deleted_count=0))

        assert reporter.stats["runs_started"] == 1
        assert reporter.stats["attempts"] == 0

    def test_events_from_bus(self):
        bus = EventBus()
        reporter = StatisticsReporter(event_bus=bus)

        bus.emit(EVENTS.AUTO_DELETE_STATUS, _status(deleting=True))
        bus.emit("something-else", _status(deleted_count=5))

        assert reporter.stats["attempts"] == 1
        assert reporter.stats["total_deleted"] == 0


@pytest.mark.unit
class TestSummaryAndStats:
    """Test print_summary() and get_stats()."""

    def test_print_summary(self, caplog):
        reporter = StatisticsReporter(start_time=datetime.now() - timedelta(hours=1))
        reporter.update_from_status(_status(deleted_count=4, message="Scanning"))

        with caplog.at_level(logging.INFO, logger="reply_cleanup"):
            reporter.print_summary()

        assert "AUTO DELETE SUMMARY" in caplog.text
        assert "Total Deleted: 4" in caplog.text
        assert "Last Status: Scanning" in caplog.text
        assert "items/hour" in caplog.text

    def test_get_stats(self):
        start = datetime.now() - timedelta(hours=2)
        reporter = StatisticsReporter(start_time=start)
        reporter.update_from_status(_status(deleted_count=1, message="Deleting"))

        stats = reporter.get_stats()

        assert stats["total_deleted"] == 1
        assert stats["last_message"] == "Deleting"
        assert stats["start_time"] == start.isoformat()
        assert stats["elapsed_hours"] >= 2

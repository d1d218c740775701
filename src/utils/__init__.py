"""
Utility modules: logging, events, statistics.
"""
from src.utils.events import EVENTS, Event, EventBus
from src.utils.logging import get_logger, setup_logging
from src.utils.statistics import StatisticsReporter

__all__ = ["setup_logging", "get_logger", "EVENTS", "Event", "EventBus", "StatisticsReporter"]

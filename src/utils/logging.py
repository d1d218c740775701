"""
Structured logging setup for flagged reply cleanup project.
"""
import logging
import sys
from datetime import datetime

from config import settings

LOGGER_NAME = "reply_cleanup"


def setup_logging(log_level: str = None) -> logging.Logger:
    """
    Set up structured logging with file and console handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
                   Defaults to settings.LOG_LEVEL

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear any existing handlers
    logger.handlers.clear()

    log_format = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    log_file = settings.LOG_DIR / f"cleanup_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)  # File gets all logs
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)

    logger.info(f"Logging initialized. Log file: {log_file}")
    logger.debug(f"Log level: {log_level}")

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Module loggers are parented under the project logger so that handlers
    installed by setup_logging() apply to them.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)

"""
Logging configuration for the MODIS state data story.

Console output goes to stderr so the CLI can print views as JSON on stdout;
the log file keeps the full DEBUG trail of loading and threshold selection.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from datetime import datetime

DEFAULT_LOG_FILE = "logs/modis_story.log"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def setup_logger(
    name: str = "modis_story",
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    console_level: str = "INFO"
) -> logging.Logger:
    """
    Set up the story logger with a console (stderr) and a file handler.

    Component loggers created with logging.getLogger(__name__) inside the
    package are children of this logger and share its handlers.

    Args:
        name: Logger name
        log_file: Path to log file. If None, uses LOG_FILE env var or default
        log_level: Logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_level: Minimum level echoed to the console

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_file = os.getenv("LOG_FILE", DEFAULT_LOG_FILE)

    # Log directory may not exist on first run
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(_level(log_level, logging.INFO))

    # Re-running setup (tests, repeated app construction) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console: stderr
    console_handler = logging.StreamHandler()
    console_handler.setLevel(_level(console_level, logging.INFO))
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    # File: everything
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    # Root handlers would duplicate every line
    logger.propagate = False

    return logger


class LoggerContext:
    """Time a named start-up step (data load, statistics) and log its outcome."""

    def __init__(self, logger: logging.Logger, operation: str):
        """
        Initialize logger context.

        Args:
            logger: Logger instance
            operation: Name of the step being timed
        """
        self.logger = logger
        self.operation = operation
        self.start_time: Optional[datetime] = None
        self.duration: Optional[float] = None

    def __enter__(self):
        """Log the start of the step."""
        self.start_time = datetime.now()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log completion or failure. Exceptions always propagate."""
        self.duration = (datetime.now() - self.start_time).total_seconds()

        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation} after {self.duration:.2f}s: {exc_val}",
                exc_info=True
            )
            return False

        self.logger.info(f"Completed {self.operation} in {self.duration:.2f}s")
        return False

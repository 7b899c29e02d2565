"""Centralized logging configuration for the connection pool tooling.

This module provides consistent logging setup across all components with
proper formatting, levels, and output handling.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path


class ColorFormatter(logging.Formatter):
    """Colored console formatter for better readability."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(level: str | None = None) -> None:
    """Set up centralized logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). When
            None, ``LOG_LEVEL`` is used, then INFO.
    """
    level = level or os.getenv("LOG_LEVEL", "INFO")
    log_to_file = os.getenv("LOG_TO_FILE", "false").lower() == "true"
    log_file = os.getenv("LOG_FILE", "logs/element_connections.log") if log_to_file else None

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    base_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # stderr keeps stdout free for CLI reports
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    if sys.stderr.isatty():
        formatter: logging.Formatter = ColorFormatter(base_format, date_format)
    else:
        formatter = logging.Formatter(base_format, date_format)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(base_format, date_format))
        root_logger.addHandler(file_handler)

    # Per-publish event logging stays off even at DEBUG
    logging.getLogger("src.core.events").setLevel(max(numeric_level, logging.INFO))
    logging.getLogger("src").setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """Get a properly configured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)

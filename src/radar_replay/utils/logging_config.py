"""
Logging Configuration for Radar Replay

Provides standardized logging setup with consistent formatting across the project.
Supports both console and file output with configurable levels.

Key features:
- Console and file output options
- Simple, detailed and structured (JSON) formats
- Per-module log level configuration
- Context manager for temporary log level changes

Usage:
    from radar_replay.utils.logging_config import setup_logging, get_logger

    logger = setup_logging("radar_replay", level=logging.DEBUG)
    logger.info("Recording loaded")

    # Structured logging
    logger.info("Ingestion finished", extra={"extra": {"steps": 1200}})
"""

import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional

DETAILED_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON for easy parsing and analysis.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra") and record.extra:
            log_data.update(record.extra)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    simple_format: bool = False,
    structured: bool = False,
) -> logging.Logger:
    """
    Set up standardized logging.

    Args:
        name: Logger name (typically the package name)
        level: Logging level
        log_file: Log file path (None for no file logging)
        console: Enable console output
        simple_format: Use simplified format (timestamp only, no level/name)
        structured: Use JSON structured format (for file logging)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
        console_formatter = logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT)
    elif simple_format:
        formatter = logging.Formatter(fmt="%(asctime)s, %(message)s", datefmt=DATE_FORMAT)
        console_formatter = formatter
    else:
        formatter = logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT)
        console_formatter = formatter

    # Console always gets a readable format
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get or create a logger with default configuration.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


@contextmanager
def temporary_log_level(logger_name: str, level: int):
    """
    Context manager for temporarily changing log level.

    Usage:
        with temporary_log_level("radar_replay.core.ingestion", logging.DEBUG):
            build_entities(steps)
    """
    logger = logging.getLogger(logger_name)
    original_level = logger.level
    try:
        logger.setLevel(level)
        yield
    finally:
        logger.setLevel(original_level)


def configure_module_log_levels(module_levels: Dict[str, int]) -> None:
    """
    Configure log levels for specific modules.

    Example:
        configure_module_log_levels({
            "radar_replay.core.recording": logging.DEBUG,
            "radar_replay.core.clock": logging.INFO,
        })
    """
    for module_name, level in module_levels.items():
        logging.getLogger(module_name).setLevel(level)


# Per-tick modules are chatty at DEBUG
DEFAULT_MODULE_LEVELS: Dict[str, int] = {
    "radar_replay.core.clock": logging.INFO,
    "radar_replay.core.liveness": logging.INFO,
}

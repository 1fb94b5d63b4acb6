# src/utils/logger.py
import logging
import sys
from typing import List, Optional

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Shared file handlers and the loggers they are attached to
_file_handlers: List[logging.Handler] = []
_loggers: List[logging.Logger] = []


def setup_logger(
    name: str,
    level: int = logging.INFO,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Return a named logger writing to stdout.

    Args:
        name: Logger name, upper-case by convention (e.g. "IP_SCREENING_SERVICE")
        level: Logging level (default: INFO)
        format_string: Custom format string for log messages

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Handlers are attached once per name
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(format_string or LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    for file_handler in _file_handlers:
        logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate messages
    logger.propagate = False

    _loggers.append(logger)
    return logger


def add_file_handler(path: str, level: int = logging.INFO) -> logging.Handler:
    """Write every application logger to ``path``, including ones created later"""
    file_handler = logging.FileHandler(path)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    _file_handlers.append(file_handler)
    for logger in _loggers:
        logger.addHandler(file_handler)
    return file_handler

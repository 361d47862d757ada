"""
Logging setup utilities for hosts embedding the engine.

Configures the root logger with a console handler and, optionally, a log
file so that engine modules can simply use ``logging.getLogger(__name__)``.
"""

import logging
from pathlib import Path
from typing import Optional

from hexblokus.config import default_log_level

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    log_file: Optional[Path] = None,
    level: Optional[int] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging with a console handler and an optional file handler.

    Args:
        log_file: Optional path of a log file; its directory is created if
            needed
        level: Logging level (default: HEXBLOKUS_LOG_LEVEL, else INFO)
        format_string: Optional custom format string. If None, uses default format.

    Returns:
        The configured root logger

    Example:
        >>> setup_logging(Path("logs/game.log"), logging.DEBUG)
        >>> logger = logging.getLogger(__name__)
        >>> logger.info("This will be logged to both console and file")
    """
    if level is None:
        level = default_log_level()

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    # (useful if setup_logging is called multiple times)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger

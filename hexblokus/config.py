"""
Runtime flags read from the environment.
"""

import logging
import os

# Log every placement classification at DEBUG level
PLACEMENT_DEBUG = bool(os.getenv("HEXBLOKUS_PLACEMENT_DEBUG", ""))

# Default level used by utils.logging_setup when none is passed explicitly
LOG_LEVEL = os.getenv("HEXBLOKUS_LOG_LEVEL", "INFO").upper()


def default_log_level() -> int:
    """Resolve HEXBLOKUS_LOG_LEVEL to a logging level, falling back to INFO."""
    level = logging.getLevelName(LOG_LEVEL)
    if isinstance(level, int):
        return level
    return logging.INFO

"""
Logging infrastructure setup.

Colored console logging with the level taken from the environment.
"""

import logging
import os
from typing import Optional

import coloredlogs  # type: ignore

# Get logger for this module
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

LEVEL_STYLES = {
    "debug": {"color": "cyan"},
    "info": {"color": "green"},
    "warning": {"color": "yellow"},
    "error": {"color": "red"},
    "critical": {"color": "red", "bold": True},
}

# Third-party loggers that are chatty at DEBUG.
QUIET_LOGGERS = ("urllib3", "charset_normalizer")


def get_log_level(default: str = "INFO") -> int:
    """
    Get the logging level from the LOG_LEVEL environment variable.

    Returns:
        The logging level (falls back to the default if not set or invalid)
    """
    level_name = os.getenv("LOG_LEVEL", default).upper()
    level = logging.getLevelName(level_name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(default.upper())


def setup_logger(level: Optional[int] = None) -> None:
    """Configure colored console logging for the application."""
    log_level = level if level is not None else get_log_level()

    coloredlogs.install(level=log_level, fmt=LOG_FORMAT, level_styles=LEVEL_STYLES)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logger.debug("log level: %s", logging.getLevelName(log_level))

"""
Logging setup for the user adapter.

Everything logs under the ``user_adapter`` namespace so hosts can route or
silence the adapter independently of their own loggers.
"""
import logging
from typing import Optional

from user_adapter.config import get_settings

LOGGER_NAME = "user_adapter"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the adapter logger.

    In the development environment the logger is forced to DEBUG and gets
    its own stream handler, otherwise records propagate to whatever the
    host application configured.

    Args:
        level: Log level name, defaults to the LOG_LEVEL setting

    Returns:
        The configured ``user_adapter`` logger
    """
    settings = get_settings()
    logger = logging.getLogger(LOGGER_NAME)

    if settings.environment == "development":
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(handler)
        return logger

    level_name = (level or settings.log_level).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger

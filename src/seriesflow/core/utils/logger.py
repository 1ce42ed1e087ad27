"""
Logging utilities for seriesflow
"""

import logging
import os
import sys

LOG_LEVEL_ENV = "SERIESFLOW_LOG_LEVEL"


def get_logger(name: str = "seriesflow") -> logging.Logger:
    """
    Get logger instance

    The level is read from the SERIESFLOW_LOG_LEVEL environment variable
    the first time a logger is configured (default: INFO).

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Create console handler
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)

        # Add handler to logger
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())

    return logger


def _level_from_env() -> int:
    """Resolve log level name from environment, falling back to INFO"""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO

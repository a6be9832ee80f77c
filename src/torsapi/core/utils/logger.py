"""
Logging utilities for torsapi
"""

import logging
import os
import sys

ROOT_LOGGER_NAME = "torsapi"


def _configure(logger: logging.Logger) -> None:
    if logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(get_log_level_from_env())


def get_log_level_from_env(default: int = logging.INFO) -> int:
    """Resolve TORSAPI_LOG_LEVEL to a logging level (default INFO)"""
    level_name = os.getenv("TORSAPI_LOG_LEVEL", "").upper()
    return getattr(logging, level_name, default) if level_name else default


def set_log_level(level: int) -> None:
    """Set the level of every torsapi logger at once"""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get logger instance

    Loggers under the torsapi namespace share one stdout handler on the
    "torsapi" logger, so set_log_level() controls all of them. The level
    defaults to INFO and can be changed with TORSAPI_LOG_LEVEL.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        _configure(logging.getLogger(ROOT_LOGGER_NAME))
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    _configure(logger)
    return logger

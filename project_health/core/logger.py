"""
Logging setup.

All modules obtain loggers through setup_logger so handlers and format
are configured in exactly one place.
"""

import logging
import sys

from project_health.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_ROOT_LOGGER_NAME = "project_health"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(get_settings().LOG_LEVEL.upper())
    return root


def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger attached to the application's handler.

    Args:
        name: Logger name, usually the calling module's __name__

    Returns:
        logging.Logger: Configured logger
    """
    _configure_root()
    if name == _ROOT_LOGGER_NAME or name.startswith(f"{_ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


logger = setup_logger(_ROOT_LOGGER_NAME)

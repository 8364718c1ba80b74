"""
Logging configuration for the listing service.

``setup_logging`` configures the root logger with a console handler once;
later calls only adjust the level.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logger.

    Args:
        level: Logging level name (e.g. "DEBUG"); defaults to the configured log_level
    """
    if level is None:
        from listing_service.config import get_settings
        level = get_settings().log_level

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    if root.handlers:
        # Already configured, e.g. by a host application or pytest
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

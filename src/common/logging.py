"""Logging configuration for the warehouse CLI.

Modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves; entry points call ``setup_logging`` once so that every
logger, ``__main__`` included, reaches the same stdout handler.
"""

from __future__ import annotations

import logging
import sys

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int | str | None = None) -> None:
    """Attach the project handler to the root logger.

    Args:
        level: Logging level or level name. Defaults to ``settings.logging.level``.

    Does nothing if the root logger already has handlers (for example
    when the host application or the test runner configured logging).
    """
    logging.basicConfig(
        level=level or settings.logging.level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
    )

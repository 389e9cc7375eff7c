"""Logging setup for the web app.

Called once when the FastAPI app is created. Module code only ever does
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys

from cartform.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings.

    Raises:
        ValueError: if LOG_LEVEL is not a standard logging level name.
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown LOG_LEVEL: {settings.LOG_LEVEL}")

    logging.basicConfig(
        level=level,
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # allow reconfiguration (tests, reload)
    )

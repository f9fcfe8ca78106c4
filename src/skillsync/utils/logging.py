"""Logging setup for skillsync.

Log records go to stderr so that stdout only carries command output.
The default level is WARNING; set SKILLSYNC_LOG_LEVEL to see more.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger.

    Args:
        name: Logger name (typically the module's short name)

    Returns:
        Logger named ``skillsync.<name>``
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(f"skillsync.{name}")

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter(f"[{name}] %(message)s"))
        logger.addHandler(handler)

        level_name = os.environ.get("SKILLSYNC_LOG_LEVEL", "WARNING").upper()
        logger.setLevel(getattr(logging, level_name, logging.WARNING))

    _loggers[name] = logger
    return logger

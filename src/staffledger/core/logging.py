"""Logging setup for the command line and server.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are attached here, once, by the entry points.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Attach a single handler to the ``staffledger`` logger.

    Args:
        level: Logging level name.
        fmt: ``console`` for rich output on stderr, ``plain`` for
            timestamped single-line records.
    """
    handler: logging.Handler
    if fmt == "console":
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger = logging.getLogger("staffledger")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False

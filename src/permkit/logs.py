"""
Logging setup for permkit tooling.

Library modules only ever call `logging.getLogger(__name__)` and log at DEBUG;
they never install handlers. Entry points (the benchmark CLI) call
`configure_logging()` once to route records through rich.

Environment:
    PERMKIT_LOG_LEVEL   DEBUG | INFO | WARNING | ERROR (default INFO)
"""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

__all__ = ["configure_logging"]

_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Attach a RichHandler to the `permkit` logger (idempotent)."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    name = (level or os.getenv("PERMKIT_LOG_LEVEL", "INFO")).upper()
    resolved = getattr(logging, name, logging.INFO)

    logger = logging.getLogger("permkit")
    logger.setLevel(resolved)
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    _CONFIGURED = True

"""Logging configuration for the CLI.

Library modules only create loggers; handlers are installed here, once,
when the CLI starts.
"""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

from chartbroker.cli.common.output import err_console
from chartbroker.core.config import LOG_LEVEL_ENV


def resolve_level(verbose: int) -> int:
    """Return the log level for a -v count, falling back to the environment."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    name = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: int = 0) -> None:
    """Route chartbroker logs through a Rich handler on stderr."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger("chartbroker")
    root.handlers[:] = [handler]
    root.setLevel(resolve_level(verbose))

"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from chartbroker.cli.common.output import out
from chartbroker.core.errors import BrokerError, InvalidLocatorError, NotFoundError


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_code_for(exc: BrokerError) -> int:
    """Map a broker error onto a process exit code."""
    if isinstance(exc, InvalidLocatorError):
        return 2
    if isinstance(exc, NotFoundError):
        return 3
    return 1


def exit_from_exc(exc: BrokerError, *, message: str | None = None) -> NoReturn:
    """Print a broker error and exit with the code matching its type."""
    out.error(message or str(exc))
    raise typer.Exit(exit_code_for(exc)) from exc

"""Error handling shared by CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

import typer
from rich.console import Console

from lexdialogue.cli.formatters import ErrorFormatter, OutputFormat
from lexdialogue.config import get_logger
from lexdialogue.exceptions import LexDialogueError

logger = get_logger(__name__)


class CLIHandler:
    """Report a failed command on stderr and exit."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self.formatter = ErrorFormatter(self.console)

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Print ``error`` and exit with ``exit_code``.

        Raises:
            typer.Exit: Always
        """
        self.formatter.print(
            error, OutputFormat.JSON if json_output else OutputFormat.TEXT
        )
        if isinstance(error, LexDialogueError):
            logger.debug(
                "Command failed",
                error_type=type(error).__name__,
                details=error.details,
                exit_code=exit_code,
            )
        else:
            logger.debug("Command failed", exc_info=error, exit_code=exit_code)
        raise typer.Exit(exit_code)


def cli_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn exceptions escaping a command into a reported failure.

    A ``json_output`` keyword argument of the command selects JSON errors.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as e:
            CLIHandler().handle_error(e, kwargs.get("json_output", False))

    return wrapper

"""Default output sink: leveled console messages and the fatal exit path.

Every message goes to stderr through :data:`~cmdparser.cli.console.console`.
:meth:`Output.fatal` is the single place that decides between
terminating the process and raising :class:`~cmdparser.exceptions.FatalError`.
"""

from __future__ import annotations

import sys
from enum import IntEnum

from cmdparser.cli import exit_codes
from cmdparser.cli.console import console, escape
from cmdparser.core.context import ExecutionContext
from cmdparser.exceptions import FatalError


def report_error(message: str, *, hint: str | None = None) -> None:
    """Render ``Error: <message>`` and an optional hint line on stderr."""
    console.print(
        f"[bold red]Error:[/bold red] {escape(message)}",
        plain=f"Error: {message}",
    )
    if hint:
        console.print(
            f"[yellow]Hint:[/yellow] {escape(hint)}",
            plain=f"Hint: {hint}",
        )


class LogLevel(IntEnum):
    """Verbosity threshold; a message prints when its level is <= the threshold."""

    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4


class Output:
    """Console-backed :class:`~cmdparser.core.protocols.OutputSink`."""

    def __init__(
        self,
        context: ExecutionContext | None = None,
        *,
        level: LogLevel = LogLevel.INFO,
    ) -> None:
        self.context: ExecutionContext | None = context
        """Fixed context, or ``None`` to follow the reporting command's."""
        self.level = level

    # --- leveled messages ----------------------------------------------

    def debug(self, message: str) -> None:
        if self.level >= LogLevel.DEBUG:
            console.print(f"[dim]{escape(message)}[/dim]", plain=message)

    def info(self, message: str) -> None:
        if self.level >= LogLevel.INFO:
            console.print(escape(message), plain=message)

    def warn(self, message: str) -> None:
        if self.level >= LogLevel.WARN:
            console.print(
                f"[yellow]Warning:[/yellow] {escape(message)}",
                plain=f"Warning: {message}",
            )

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print *message* (and *hint*) regardless of the level."""
        report_error(message, hint=hint)

    # --- terminal path ---------------------------------------------------

    def fatal(
        self,
        message: str,
        *,
        context: ExecutionContext | None = None,
    ) -> None:
        """Report *message* and terminate.

        *context* is the reporting command's context and takes precedence
        over the one this sink was built with; with neither the sink is
        interactive.  Under :attr:`ExecutionContext.TEST` a
        :class:`FatalError` is raised instead so a test can catch and
        inspect it.
        """
        effective = context or self.context or ExecutionContext.INTERACTIVE
        if effective.is_test:
            raise FatalError(message)
        self.error(message)
        sys.exit(exit_codes.GENERAL_ERROR)

"""Process exit statuses of an interactive command tree.

Only :meth:`~cmdparser.cli.command.Command.execute`,
:meth:`~cmdparser.cli.command.Command.check_err` and
:meth:`~cmdparser.cli.output.Output.fatal` terminate the process, and
always with one of these.
"""

from __future__ import annotations

SUCCESS: int = 0

GENERAL_ERROR: int = 1
"""Usage conflict, parse failure or configuration error, already printed."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted by SIGINT (128 + 2)."""

"""Custom exception hierarchy for cmdparser.

Every error raised by this package inherits from :class:`CmdParserError`
so that :meth:`~cmdparser.cli.command.Command.check_err` can apply a
single exit policy.  Raw ``argparse`` failures must never escape the
infrastructure layer; they are re-raised as :class:`UsageError`.

Hierarchy
---------
CmdParserError
├── ConfigurationError
├── UsageError
├── FatalError
└── DependencyError
"""

from __future__ import annotations


class CmdParserError(Exception):
    """Base exception for all cmdparser errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Programming errors ----------------------------------------------------

class ConfigurationError(CmdParserError):
    """Raised when the calling code declares an invalid command or flag.

    These are defects in the host application, never user input, and
    are raised as soon as the offending configuration is assembled.
    """


# --- User errors -----------------------------------------------------------

class UsageError(CmdParserError):
    """Raised when the parsing engine rejects the supplied arguments."""


class FatalError(CmdParserError):
    """Raised by :meth:`Output.fatal` in place of exiting under test."""


# --- Environment -----------------------------------------------------------

class DependencyError(CmdParserError):
    """Raised when an optional runtime dependency is not available."""

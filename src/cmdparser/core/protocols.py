"""Protocols (interfaces) consumed across layers.

The infrastructure layer builds ``argparse`` parsers from any object
satisfying :class:`CommandNode`; the command layer reports fatal errors
to any object satisfying :class:`OutputSink`.  Neither depends on the
concrete classes in :mod:`cmdparser.cli`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cmdparser.core.arguments import ParsedArguments
    from cmdparser.core.models import FlagOptions, Options

RunCallback = Callable[["ParsedArguments"], None]
"""User callback invoked with the final parsed arguments."""


class OutputSink(Protocol):
    """Contract for reporting messages to the user.

    :meth:`fatal` reports a message that ends the invocation.  The
    calling command raises :class:`~cmdparser.exceptions.FatalError`
    if it returns normally.
    """

    def fatal(self, message: str) -> None:
        ...  # pragma: no cover


class CommandNode(Protocol):
    """Read-only view of a defined command used to build the engine tree."""

    @property
    def options(self) -> Options:
        ...  # pragma: no cover

    @property
    def flags(self) -> Sequence[FlagOptions]:
        """Flags registered directly on this node."""
        ...  # pragma: no cover

    @property
    def sub_commands(self) -> Sequence[CommandNode]:
        ...  # pragma: no cover

    @property
    def example_text(self) -> str:
        ...  # pragma: no cover

    def dispatch(self, arguments: ParsedArguments) -> None:
        """Run the node's handler with the resolved arguments."""
        ...  # pragma: no cover

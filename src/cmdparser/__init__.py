"""cmdparser: typed command trees on top of ``argparse``.

Declare commands, flags, examples and positional-argument aliasing with
frozen option objects; execute the tree once per process.
"""

from cmdparser.cli.command import Command
from cmdparser.cli.output import LogLevel, Output
from cmdparser.core import (
    Example,
    ExecutionContext,
    FirstArgAlternativeForFlag,
    FlagKind,
    FlagOptions,
    Options,
    ParsedArguments,
)
from cmdparser.exceptions import (
    CmdParserError,
    ConfigurationError,
    FatalError,
    UsageError,
)
from cmdparser.version import __version__

__all__: list[str] = [
    "CmdParserError",
    "Command",
    "ConfigurationError",
    "Example",
    "ExecutionContext",
    "FatalError",
    "FirstArgAlternativeForFlag",
    "FlagKind",
    "FlagOptions",
    "LogLevel",
    "Options",
    "Output",
    "ParsedArguments",
    "UsageError",
    "__version__",
]

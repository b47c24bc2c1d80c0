"""Core layer — configuration models and pure helpers.

Rules
-----
* No ``print()`` calls.
* No ``argparse`` imports.
* No imports from ``cli`` or ``infra``.
"""

from cmdparser.core.arguments import ParsedArguments
from cmdparser.core.context import ExecutionContext
from cmdparser.core.examples import generate_examples
from cmdparser.core.models import (
    Example,
    FirstArgAlternativeForFlag,
    FlagKind,
    FlagOptions,
    Options,
)
from cmdparser.core.protocols import CommandNode, OutputSink, RunCallback

__all__: list[str] = [
    "CommandNode",
    "Example",
    "ExecutionContext",
    "FirstArgAlternativeForFlag",
    "FlagKind",
    "FlagOptions",
    "Options",
    "OutputSink",
    "ParsedArguments",
    "RunCallback",
    "generate_examples",
]

"""Shared pytest fixtures and configuration for the cmdparser test suite.

Guidelines
----------
* No test may terminate the process: build trees with
  ``ExecutionContext.TEST`` or assert on ``SystemExit``.
* Never read the real ``sys.argv`` — pass ``argv`` explicitly.
* Tests must not depend on terminal state.
"""

from __future__ import annotations

from typing import Any

import pytest

from cmdparser import (
    Command,
    ExecutionContext,
    FirstArgAlternativeForFlag,
    FlagOptions,
    Options,
    ParsedArguments,
)
from cmdparser.exceptions import FatalError


class RecordingOutput:
    """Output sink that records fatal messages and raises like the TEST context."""

    def __init__(self) -> None:
        self.fatals: list[str] = []

    def fatal(self, message: str) -> None:
        self.fatals.append(message)
        raise FatalError(message)


class RunRecorder:
    """Run callback that keeps every ``ParsedArguments`` it receives."""

    def __init__(self) -> None:
        self.calls: list[ParsedArguments] = []

    def __call__(self, arguments: ParsedArguments) -> None:
        self.calls.append(arguments)

    @property
    def last(self) -> ParsedArguments:
        return self.calls[-1]


def make_options(**overrides: Any) -> Options:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, Any] = {"use": "tool", "short": "Example tool"}
    defaults.update(overrides)
    return Options(**defaults)


def build_use_tree(
    recorder: RunRecorder,
    *,
    context: ExecutionContext | None = ExecutionContext.TEST,
    target: str | None = None,
) -> Command:
    """``tool [--verbose] use|u [database] [--database/-d string]``."""
    use = Command(
        Options(
            use="use [database]",
            short="Select a database",
            aliases=("u",),
            first_arg_alternative_for_flag=FirstArgAlternativeForFlag(
                "database", target=target,
            ),
            run=recorder,
        )
    )
    use.define_command()
    use.add_flag(
        FlagOptions(name="database", usage="Database name", shorthand="d", string="")
    )

    root = Command(make_options(), context=context)
    root.define_command(use)
    root.add_flag(
        FlagOptions(name="verbose", usage="Verbose output", shorthand="v", boolean=False)
    )
    return root


@pytest.fixture()
def recorder() -> RunRecorder:
    return RunRecorder()


@pytest.fixture()
def recording_output() -> RecordingOutput:
    return RecordingOutput()

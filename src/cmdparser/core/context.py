"""Execution context: interactive process vs. automated test run.

Terminating the process from inside a test run would abort the test
runner itself, so fatal paths consult the context they were built with
instead of calling :func:`sys.exit` unconditionally.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from enum import Enum

TEST_RUNNER_SUFFIXES: tuple[str, ...] = (
    "pytest",
    "py.test",
    "pytest/__main__.py",
)
"""Suffixes of ``argv[0]`` that identify a test-runner process."""

VERBOSE_TEST_FLAG: str = "-v"
"""Second argument passed by IDE test runners in verbose mode."""


class ExecutionContext(Enum):
    """Where a command tree is executing."""

    INTERACTIVE = "interactive"
    TEST = "test"

    @classmethod
    def detect(cls, argv: Sequence[str] | None = None) -> ExecutionContext:
        """Infer the context from process arguments.

        Explicit injection is preferred; this is an opt-in for hosts
        that cannot thread a context through.
        """
        args = list(sys.argv if argv is None else argv)
        if args and args[0].replace("\\", "/").endswith(TEST_RUNNER_SUFFIXES):
            return cls.TEST
        if len(args) > 1 and args[1] == VERBOSE_TEST_FLAG:
            return cls.TEST
        return cls.INTERACTIVE

    @property
    def is_test(self) -> bool:
        return self is ExecutionContext.TEST

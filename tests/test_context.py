"""Tests for execution-context detection (core/context.py)."""

from __future__ import annotations

import sys

import pytest

from cmdparser.core.context import ExecutionContext


class TestDetect:
    @pytest.mark.parametrize(
        "argv",
        [
            ["/usr/local/bin/pytest"],
            ["/venv/bin/py.test", "tests"],
            ["/usr/lib/python3/site-packages/pytest/__main__.py"],
            ["C:\\venv\\Scripts\\pytest"],
            ["tool", "-v"],
        ],
    )
    def test_test_runner_detected(self, argv: list[str]) -> None:
        assert ExecutionContext.detect(argv) is ExecutionContext.TEST

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["tool"],
            ["tool", "query", "-v"],
            ["/usr/bin/pytest-runner-wrapper.sh"],
        ],
    )
    def test_interactive_otherwise(self, argv: list[str]) -> None:
        assert ExecutionContext.detect(argv) is ExecutionContext.INTERACTIVE

    def test_defaults_to_process_arguments(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["tool", "list"])
        assert ExecutionContext.detect() is ExecutionContext.INTERACTIVE


class TestIsTest:
    def test_flags(self) -> None:
        assert ExecutionContext.TEST.is_test
        assert not ExecutionContext.INTERACTIVE.is_test

"""Rendering of :class:`~cmdparser.core.models.Example` help text."""

from __future__ import annotations

from collections.abc import Iterable

from cmdparser.core.models import Example


def generate_examples(examples: Iterable[Example]) -> str:
    """Render *examples* as ``# <description>`` blocks of indented steps.

    >>> generate_examples([Example("List items", ("tool list",))])
    '# List items\\n  tool list\\n'
    """
    lines: list[str] = []
    for example in examples:
        lines.append(f"# {example.description}\n")
        lines.extend(f"  {step}\n" for step in example.steps)
    return "".join(lines)

"""Console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so that
the fatal-error path keeps working (as plain ``stderr`` text) even when
Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from cmdparser.exceptions import DependencyError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``DependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise DependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a non-wrapping Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, soft_wrap=True, highlight=False)


def escape(text: str) -> str:
	"""Escape Rich markup in user-supplied *text*."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object, plain: str | None = None) -> None:
		"""Render with Rich when available, else *plain* (or *objects*) on stderr."""
		try:
			rich_console = get_rich_console()
		except DependencyError:
			if plain is not None:
				print(plain, file=sys.stderr)
			else:
				print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()

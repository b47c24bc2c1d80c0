"""Parsed-argument value object handed from the parse phase to run logic."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from cmdparser.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class ParsedArguments(Mapping[str, Any]):
    """Immutable result of resolving one invocation.

    Behaves as a read-only mapping of flag name to value.  Defaults are
    present for every flag visible to the resolved command, so lookups
    only fail for names that were never registered.
    """

    command_path: tuple[str, ...] = ()
    """Names from the root to the resolved command, root included."""

    flags: Mapping[str, Any] = field(default_factory=dict)
    """Flag name to parsed (or default) value."""

    args: tuple[str, ...] = ()
    """Bare positional arguments given to the resolved command."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "command_path", tuple(self.command_path))
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))
        object.__setattr__(self, "args", tuple(self.args))

    def __getitem__(self, name: str) -> Any:
        return self.flags[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.flags)

    def __len__(self) -> int:
        return len(self.flags)

    # --- typed accessors -------------------------------------------------

    def get_string(self, name: str) -> str:
        return self._typed(name, str, "string")

    def get_int(self, name: str) -> int:
        return self._typed(name, int, "int")

    def get_bool(self, name: str) -> bool:
        return self._typed(name, bool, "bool")

    def _typed(self, name: str, kind: type, label: str) -> Any:
        if name not in self.flags:
            raise ConfigurationError(f"flag accessed but not defined: {name}")
        value = self.flags[name]
        if kind is int and isinstance(value, bool):
            value = None
        if not isinstance(value, kind):
            raise ConfigurationError(
                f"trying to get {label} value of flag of type "
                f"{type(self.flags[name]).__name__}: {name}",
            )
        return value

    # --- derivation ------------------------------------------------------

    def with_value(self, name: str, value: Any) -> ParsedArguments:
        """Return a copy with *name* set to *value*."""
        updated = dict(self.flags)
        updated[name] = value
        return replace(self, flags=updated)

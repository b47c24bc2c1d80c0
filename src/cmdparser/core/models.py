"""Declarative configuration models for cmdparser.

All models are **frozen** dataclasses.  Validation runs in
``__post_init__`` so an instance that exists is always well formed:
misconfiguration surfaces as :class:`~cmdparser.exceptions.ConfigurationError`
at the point the host application assembles it, never later during a
parse.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cmdparser.exceptions import ConfigurationError

if TYPE_CHECKING:
    from cmdparser.core.protocols import RunCallback


# ---------------------------------------------------------------------------
# Examples
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Example:
    """A described sequence of invocations shown in the help epilog."""

    description: str
    """Header rendered as ``# <description>``."""

    steps: tuple[str, ...] = ()
    """Command lines rendered below the header, indented two spaces."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))


# ---------------------------------------------------------------------------
# Positional argument aliasing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FirstArgAlternativeForFlag:
    """Allow one bare argument to stand in for a string flag.

    ``tool use mydb`` then behaves like ``tool use --database mydb``.
    Supplying both is a usage conflict.
    """

    flag: str
    """Long name of the string flag the argument replaces."""

    target: str | None = None
    """Parsed-argument key receiving the argument.  Defaults to *flag*."""

    def __post_init__(self) -> None:
        if not self.flag:
            raise ConfigurationError("Must provide flag")
        if self.target is None:
            object.__setattr__(self, "target", self.flag)
        if not self.target:
            raise ConfigurationError("Must set target")


# ---------------------------------------------------------------------------
# Command options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """Everything a :class:`~cmdparser.cli.command.Command` declares."""

    use: str
    """Command name followed by an optional argument hint, e.g. ``"use [db]"``."""

    short: str = ""
    long: str = ""
    aliases: tuple[str, ...] = ()
    examples: tuple[Example, ...] = ()
    run: RunCallback | None = None
    first_arg_alternative_for_flag: FirstArgAlternativeForFlag | None = None

    def __post_init__(self) -> None:
        if not self.use or not self.use.strip():
            raise ConfigurationError("Must implement command definition")
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "examples", tuple(self.examples))

    @property
    def name(self) -> str:
        """First word of :attr:`use`."""
        return self.use.split()[0]


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------

class FlagKind(Enum):
    """Value type stored by a flag."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"


@dataclass(frozen=True, slots=True)
class FlagOptions:
    """A request to register one persistent flag.

    Exactly one of :attr:`string`, :attr:`integer` and :attr:`boolean`
    must be populated; the populated slot is both the flag's type and
    its default value.
    """

    name: str
    usage: str
    shorthand: str = ""
    string: str | None = None
    integer: int | None = None
    boolean: bool | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Must provide name")
        if self.name.startswith("-"):
            raise ConfigurationError(
                f"Flag name {self.name!r} must not start with '-'",
                hint="Pass the bare long name, e.g. 'database'.",
            )
        if not self.usage:
            raise ConfigurationError("Must provide usage")
        if len(self.shorthand) > 1 or self.shorthand == "-":
            raise ConfigurationError(
                f"Shorthand {self.shorthand!r} must be a single character",
            )

        populated = [
            slot
            for slot in (self.string, self.integer, self.boolean)
            if slot is not None
        ]
        if len(populated) > 1:
            raise ConfigurationError("Only provide one type")
        if not populated:
            raise ConfigurationError("Must provide one type")

        if self.string is not None and not isinstance(self.string, str):
            raise ConfigurationError(f"Default for --{self.name} must be a str")
        if self.integer is not None and (
            isinstance(self.integer, bool) or not isinstance(self.integer, int)
        ):
            raise ConfigurationError(f"Default for --{self.name} must be an int")
        if self.boolean is not None and not isinstance(self.boolean, bool):
            raise ConfigurationError(f"Default for --{self.name} must be a bool")

    @property
    def kind(self) -> FlagKind:
        if self.string is not None:
            return FlagKind.STRING
        if self.integer is not None:
            return FlagKind.INT
        return FlagKind.BOOL

    @property
    def default(self) -> str | int | bool:
        if self.string is not None:
            return self.string
        if self.integer is not None:
            return self.integer
        return bool(self.boolean)

    @property
    def dest(self) -> str:
        """Attribute name the engine stores the parsed value under."""
        return self.name.replace("-", "_")

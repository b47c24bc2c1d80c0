"""``argparse`` adapter — the parsing engine behind every command tree.

This module is the only place that touches :mod:`argparse`.  It turns a
tree of :class:`~cmdparser.core.protocols.CommandNode` objects into a
nested parser, and turns a parse result back into
:class:`~cmdparser.core.arguments.ParsedArguments`.

Design
------
* Flags are persistent: every descendant parser re-declares its
  ancestors' flags with ``default=SUPPRESS`` so that a value given after
  the subcommand token is honoured without the descendant clobbering
  the ancestor's default.
* Each parser records its node, path and visible flags via
  ``set_defaults``; the deepest parser wins because ``argparse`` copies
  subparser namespaces over the parent's.
* A command that has subcommands and also takes an aliasing argument
  routes its first bare token through :class:`ArgumentOrCommandAction`:
  known subcommand names win, anything else is the argument.
* ``argparse`` errors never exit the process from here.  They are
  re-raised as :class:`~cmdparser.exceptions.UsageError` (bad input) or
  :class:`~cmdparser.exceptions.ConfigurationError` (conflicting
  declarations).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, NoReturn

from cmdparser.core.arguments import ParsedArguments
from cmdparser.core.models import FlagKind, FlagOptions
from cmdparser.core.protocols import CommandNode
from cmdparser.exceptions import ConfigurationError, UsageError

COMPLETION_COMMAND: str = "completion"
COMPLETION_SHELLS: tuple[str, ...] = ("bash", "zsh")

_NODE_KEY = "_cmdparser_node"
_PATH_KEY = "_cmdparser_path"
_PARSER_KEY = "_cmdparser_parser"
_FLAGS_KEY = "_cmdparser_flags"
_ARG_KEY = "_cmdparser_arg"
_SHELL_KEY = "_cmdparser_shell"


class CommandArgumentParser(argparse.ArgumentParser):
    """Raise instead of printing usage and exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=self.format_usage().strip())


class ArgumentOrCommandAction(argparse._SubParsersAction):
    """Subcommand dispatch for a command that also takes an aliasing argument.

    A first token naming a subcommand (or alias) selects it; any other
    token becomes the command's own argument and the remaining tokens are
    parsed as its flags.
    """

    def __call__(self, parser, namespace, values, option_string=None):
        token, rest = values[0], list(values[1:])
        if token in self._name_parser_map:
            super().__call__(parser, namespace, values, option_string)
            return
        if hasattr(namespace, _ARG_KEY):
            parser.error(f"unrecognized arguments: {' '.join(values)}")
        setattr(namespace, _ARG_KEY, token)
        if rest:
            _, extras = parser.parse_known_args(rest, namespace)
            if extras:
                parser.error(f"unrecognized arguments: {' '.join(extras)}")


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of parsing one argv against a built parser."""

    node: CommandNode | None
    """Resolved command, or ``None`` for the built-in completion command."""

    arguments: ParsedArguments
    parser: argparse.ArgumentParser
    """Parser of the resolved command, used to render its help."""

    completion_shell: str | None = None


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

def build_parser(root: CommandNode) -> CommandArgumentParser:
    """Build the full parser tree for *root* and its descendants."""
    parser = CommandArgumentParser(
        prog=root.options.name,
        description=root.options.long or None,
        epilog=_epilog(root),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    try:
        subparsers = _configure(parser, root, (root.options.name,), ())
        if subparsers is not None and not declares_command(root, COMPLETION_COMMAND):
            _add_completion_command(subparsers, root)
    except argparse.ArgumentError as exc:
        raise ConfigurationError(str(exc)) from exc
    return parser


def _configure(
    parser: argparse.ArgumentParser,
    node: CommandNode,
    path: tuple[str, ...],
    inherited: tuple[FlagOptions, ...],
) -> Any:
    for flag in inherited:
        _add_flag(parser, flag, inherited=True)
    for flag in node.flags:
        _add_flag(parser, flag, inherited=False)

    alternative = node.options.first_arg_alternative_for_flag
    if alternative is not None and not node.sub_commands:
        parser.add_argument(
            _ARG_KEY,
            nargs="?",
            default=argparse.SUPPRESS,
            metavar=alternative.flag.upper(),
            help=f"alternative to --{alternative.flag}",
        )

    visible = inherited + tuple(node.flags)
    parser.set_defaults(
        **{
            _NODE_KEY: node,
            _PATH_KEY: path,
            _PARSER_KEY: parser,
            _FLAGS_KEY: visible,
        }
    )

    if not node.sub_commands:
        return None

    if alternative is None:
        subparsers = parser.add_subparsers(title="Available Commands", metavar="<command>")
    else:
        subparsers = parser.add_subparsers(
            title="Available Commands",
            metavar=f"<command>|{alternative.flag.upper()}",
            action=ArgumentOrCommandAction,
        )
    for child in node.sub_commands:
        options = child.options
        child_parser = subparsers.add_parser(
            options.name,
            aliases=list(options.aliases),
            help=_escape(options.short) or None,
            description=options.long or None,
            epilog=_epilog(child),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _configure(child_parser, child, path + (options.name,), visible)
    return subparsers


def _add_flag(
    parser: argparse.ArgumentParser,
    flag: FlagOptions,
    *,
    inherited: bool,
) -> None:
    names = [f"--{flag.name}"]
    if flag.shorthand:
        names.append(f"-{flag.shorthand}")

    default = argparse.SUPPRESS if inherited else flag.default

    if flag.kind is FlagKind.BOOL:
        parser.add_argument(
            *names,
            dest=flag.dest,
            action=argparse.BooleanOptionalAction,
            default=default,
            help=_escape(flag.usage),
        )
        return

    usage = flag.usage
    if flag.default not in ("", 0):
        usage = f"{usage} (default {flag.default!r})"
    parser.add_argument(
        *names,
        dest=flag.dest,
        type=str if flag.kind is FlagKind.STRING else int,
        default=default,
        metavar=flag.kind.value,
        help=_escape(usage),
    )


def _add_completion_command(subparsers: Any, root: CommandNode) -> None:
    completion = subparsers.add_parser(
        COMPLETION_COMMAND,
        help="Generate the autocompletion script for the specified shell",
        description=(
            f"Generate the autocompletion script for {root.options.name} "
            "for the specified shell."
        ),
    )
    completion.add_argument(_SHELL_KEY, choices=COMPLETION_SHELLS, metavar="shell")
    completion.set_defaults(
        **{
            _NODE_KEY: None,
            _PATH_KEY: (root.options.name, COMPLETION_COMMAND),
            _PARSER_KEY: completion,
            _FLAGS_KEY: (),
        }
    )


def declares_command(node: CommandNode, name: str) -> bool:
    """Whether a direct child of *node* is named or aliased *name*."""
    return any(
        name == child.options.name or name in child.options.aliases
        for child in node.sub_commands
    )


def _epilog(node: CommandNode) -> str | None:
    text = node.example_text
    if not text:
        return None
    return "Examples:\n" + text


def _escape(text: str) -> str:
    """Protect literal ``%`` from argparse's help interpolation."""
    return text.replace("%", "%%")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def resolve(parser: argparse.ArgumentParser, argv: Sequence[str]) -> Resolution:
    """Parse *argv* and collect the resolved command's arguments.

    Raises
    ------
    UsageError
        When the engine rejects *argv* (unknown flag, extra argument,
        unknown subcommand, bad value).
    """
    namespace = parser.parse_args(list(argv))
    values = vars(namespace)

    flags = {
        flag.name: values.get(flag.dest, flag.default)
        for flag in values[_FLAGS_KEY]
    }
    args = (values[_ARG_KEY],) if _ARG_KEY in values else ()
    arguments = ParsedArguments(
        command_path=values[_PATH_KEY],
        flags=flags,
        args=args,
    )
    return Resolution(
        node=values[_NODE_KEY],
        arguments=arguments,
        parser=values[_PARSER_KEY],
        completion_shell=values.get(_SHELL_KEY),
    )

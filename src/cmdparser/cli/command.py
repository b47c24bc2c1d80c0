"""Command tree nodes and the process-level error boundary.

A host application builds its tree bottom-up::

    use = Command(Options(
        use="use [database]",
        short="Select a database",
        first_arg_alternative_for_flag=FirstArgAlternativeForFlag("database"),
        run=on_use,
    ))
    use.define_command()
    use.add_flag(FlagOptions(name="database", usage="Database name", string=""))

    root = Command(Options(use="tool", short="Example tool"))
    root.define_command(use, output=Output())
    root.execute()

:meth:`Command.execute` is the **sole error boundary**: every
:class:`~cmdparser.exceptions.CmdParserError` raised while parsing or
dispatching is routed through :meth:`Command.check_err`, which raises
under :attr:`ExecutionContext.TEST` and exits the process otherwise.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import NoReturn

from cmdparser.cli import exit_codes
from cmdparser.cli.console import console
from cmdparser.cli.output import Output, report_error
from cmdparser.core.arguments import ParsedArguments
from cmdparser.core.context import ExecutionContext
from cmdparser.core.examples import generate_examples
from cmdparser.core.models import FlagOptions, Options
from cmdparser.core.protocols import OutputSink
from cmdparser.exceptions import CmdParserError, ConfigurationError, FatalError
from cmdparser.infra.argparse_engine import COMPLETION_COMMAND, build_parser, resolve
from cmdparser.infra.completion import generate_completion

HELP_TOKEN: str = "--help"

CONFLICT_MESSAGE: str = (
    "Both an argument and the --{flag} flag have been provided. "
    "Please provide either an argument or the --{flag} flag"
)

_RESERVED_FLAG_NAMES: frozenset[str] = frozenset({"help"})
_RESERVED_SHORTHANDS: frozenset[str] = frozenset({"h"})


class Command:
    """One node of a command tree.

    Lifecycle: construct → :meth:`set_options` → :meth:`define_command`
    → :meth:`add_flag` (any number) → :meth:`execute` (once).
    """

    def __init__(
        self,
        options: Options | None = None,
        *,
        context: ExecutionContext | None = None,
    ) -> None:
        self._options: Options | None = options
        self._context: ExecutionContext | None = context
        self._output: OutputSink | None = None
        self._flags: list[FlagOptions] = []
        self._sub_commands: list[Command] = []
        self._parent: Command | None = None
        self._args: list[str] | None = None
        self._example_text = ""
        self._defined = False
        self._executed = False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_options(self, options: Options) -> None:
        if self._defined:
            raise ConfigurationError(
                f"Options of {self.name!r} cannot change once it is defined",
            )
        self._options = options

    def set_output(self, output: OutputSink) -> None:
        self._output = output

    def set_args(self, argv: Sequence[str]) -> None:
        """Preset the arguments :meth:`execute` parses (for unit tests)."""
        self._args = list(argv)

    def define_command(
        self,
        *sub_commands: Command,
        output: OutputSink | None = None,
    ) -> None:
        """Freeze the options and attach *sub_commands* in order."""
        if self._options is None:
            raise ConfigurationError("Must implement command definition")

        options = self._options
        if not options.long:
            options = replace(options, long=options.short)

        for sub_command in sub_commands:
            if not sub_command._defined:
                raise ConfigurationError(
                    "Must implement command definition",
                    hint="Call define_command() on subcommands before their parent.",
                )
            if sub_command._parent is not None and sub_command._parent is not self:
                raise ConfigurationError(
                    f"Command {sub_command.name!r} is already a subcommand of "
                    f"{sub_command._parent.name!r}",
                )

        self._options = options
        if output is not None:
            self._output = output
        self._example_text = generate_examples(options.examples)
        self._add_sub_commands(sub_commands)
        self._defined = True

    def add_flag(self, options: FlagOptions) -> None:
        """Register a persistent flag on this command and its descendants."""
        if options.name in _RESERVED_FLAG_NAMES or options.shorthand in _RESERVED_SHORTHANDS:
            raise ConfigurationError(
                f"Flag --{options.name} collides with the built-in help flag",
            )
        for existing in self._flags:
            if existing.name == options.name or existing.dest == options.dest:
                raise ConfigurationError(f"flag redefined: {options.name}")
            if options.shorthand and existing.shorthand == options.shorthand:
                raise ConfigurationError(
                    f"unable to redefine {options.shorthand!r} shorthand in "
                    f"{self.name!r} flagset: it's already used for "
                    f"{existing.name!r} flag",
                )
        self._flags.append(options)

    def _add_sub_commands(self, sub_commands: Sequence[Command]) -> None:
        for sub_command in sub_commands:
            sub_command._parent = self
            self._sub_commands.append(sub_command)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def options(self) -> Options:
        if self._options is None:
            raise ConfigurationError("Must implement command definition")
        return self._options

    @property
    def name(self) -> str:
        return self.options.name

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.options.aliases

    @property
    def flags(self) -> tuple[FlagOptions, ...]:
        return tuple(self._flags)

    @property
    def sub_commands(self) -> tuple[Command, ...]:
        return tuple(self._sub_commands)

    @property
    def parent(self) -> Command | None:
        return self._parent

    @property
    def root(self) -> Command:
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def example_text(self) -> str:
        return self._example_text

    @property
    def max_args(self) -> int:
        """Bare positional arguments accepted: 1 with flag aliasing, else 0."""
        return 0 if self.options.first_arg_alternative_for_flag is None else 1

    @property
    def context(self) -> ExecutionContext:
        """Own context, else the nearest ancestor's, else interactive."""
        node: Command | None = self
        while node is not None:
            if node._context is not None:
                return node._context
            node = node._parent
        return ExecutionContext.INTERACTIVE

    @property
    def output(self) -> OutputSink:
        """Own sink, else the nearest ancestor's, else a default console sink."""
        node: Command | None = self
        while node is not None:
            if node._output is not None:
                return node._output
            node = node._parent
        return Output(self.context)

    @property
    def parser(self) -> argparse.ArgumentParser:
        """Engine parser for the tree rooted at this command."""
        return build_parser(self)

    def is_sub_command(self, command: str) -> bool:
        """Whether *command* names a first-level subcommand or alias.

        ``--help`` and ``completion`` are always accepted.
        """
        if command in (HELP_TOKEN, COMPLETION_COMMAND):
            return True
        for sub_command in self._sub_commands:
            if command == sub_command.name:
                return True
            if command in sub_command.aliases:
                return True
        return False

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, argv: Sequence[str] | None = None) -> None:
        """Parse arguments and run the resolved command.

        Parameters
        ----------
        argv:
            Explicit argument list.  When ``None``, the list given to
            :meth:`set_args` is used, else ``sys.argv[1:]``.
        """
        root = self.root
        if root._executed:
            raise ConfigurationError("Command tree has already been executed")
        root._executed = True

        if argv is None:
            argv = self._args if self._args is not None else root._args
        if argv is None:
            argv = sys.argv[1:]

        try:
            self._execute(root, list(argv))
        except CmdParserError as exc:
            self.check_err(exc)
        except KeyboardInterrupt:
            if self.context.is_test:
                raise
            console.print("\n[yellow]Aborted by user.[/yellow]", plain="\nAborted by user.")
            sys.exit(exit_codes.KEYBOARD_INTERRUPT)

    def _execute(self, root: Command, argv: list[str]) -> None:
        if not root._defined:
            raise ConfigurationError("Must implement command definition")

        resolution = resolve(build_parser(root), argv)
        path = " ".join(resolution.arguments.command_path)
        debug = getattr(root.output, "debug", None)
        if debug is not None:
            debug(f"Resolved command: {path}")

        if resolution.completion_shell is not None:
            sys.stdout.write(generate_completion(root, resolution.completion_shell))
            return

        node = resolution.node
        if node is None:
            return
        if node.options.run is None and node.sub_commands and not resolution.arguments.args:
            resolution.parser.print_help()
            return
        node.dispatch(resolution.arguments)

    def dispatch(self, arguments: ParsedArguments) -> None:
        """Apply positional-argument aliasing, then invoke the run callback."""
        options = self.options
        alternative = options.first_arg_alternative_for_flag
        if alternative is not None and arguments.args:
            if arguments.get_string(alternative.flag):
                self.fatal(CONFLICT_MESSAGE.format(flag=alternative.flag))
            arguments = arguments.with_value(alternative.target, arguments.args[0])

        if options.run is not None:
            options.run(arguments)

    def fatal(self, message: str) -> NoReturn:
        """Report *message* through the output sink and stop this invocation.

        The command's context decides between exiting and raising: a
        console :class:`Output` is told the context explicitly, and a sink
        that returns normally is followed by :class:`FatalError`.
        """
        output = self.output
        if isinstance(output, Output):
            output.fatal(message, context=self.context)
        else:
            output.fatal(message)
        raise FatalError(message)

    def check_err(self, err: BaseException | None) -> None:
        """Raise *err* under test; otherwise print it and exit with status 1.

        Terminating the process inside a test run would abort the test
        runner, hence the split.
        """
        if err is None:
            return
        if self.context.is_test:
            raise err
        report_error(str(err), hint=getattr(err, "hint", None))
        sys.exit(exit_codes.GENERAL_ERROR)

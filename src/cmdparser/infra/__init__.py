"""Infrastructure layer — adapters around the ``argparse`` engine.

Modules here translate between :mod:`argparse` and the core models.
Raw ``argparse`` exceptions never leave this package.
"""

from cmdparser.infra.argparse_engine import (
    COMPLETION_COMMAND,
    CommandArgumentParser,
    Resolution,
    build_parser,
    resolve,
)
from cmdparser.infra.completion import (
    generate_bash_completion,
    generate_completion,
    generate_zsh_completion,
)

__all__: list[str] = [
    "COMPLETION_COMMAND",
    "CommandArgumentParser",
    "Resolution",
    "build_parser",
    "generate_bash_completion",
    "generate_completion",
    "generate_zsh_completion",
    "resolve",
]

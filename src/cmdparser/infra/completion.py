"""Shell completion script generation from a command tree.

Scripts are static: every reachable command path (canonical names and
aliases) maps to the words valid after it.  ``zsh`` reuses the ``bash``
function through ``bashcompinit``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from cmdparser.core.models import FlagOptions
from cmdparser.core.protocols import CommandNode
from cmdparser.infra.argparse_engine import (
    COMPLETION_COMMAND,
    COMPLETION_SHELLS,
    declares_command,
)


def _flag_words(flags: tuple[FlagOptions, ...]) -> list[str]:
    words: list[str] = []
    for flag in flags:
        words.append(f"--{flag.name}")
        if flag.shorthand:
            words.append(f"-{flag.shorthand}")
    return words


def _walk(
    node: CommandNode,
    path: tuple[str, ...],
    inherited: tuple[FlagOptions, ...],
) -> Iterator[tuple[tuple[str, ...], list[str]]]:
    """Yield ``(path, words)`` for *node* and every descendant."""
    visible = inherited + tuple(node.flags)
    words: list[str] = []
    for child in node.sub_commands:
        words.append(child.options.name)
        words.extend(child.options.aliases)
    if not path and node.sub_commands and not declares_command(node, COMPLETION_COMMAND):
        words.append(COMPLETION_COMMAND)
    words.extend(_flag_words(visible))
    words.append("--help")
    yield path, words

    for child in node.sub_commands:
        for token in (child.options.name, *child.options.aliases):
            yield from _walk(child, path + (token,), visible)


def _function_name(prog: str) -> str:
    return "_" + re.sub(r"[^A-Za-z0-9_]", "_", prog) + "_completions"


def generate_bash_completion(root: CommandNode) -> str:
    """Return a ``bash`` completion script for *root*."""
    prog = root.options.name
    function = _function_name(prog)

    cases: list[str] = []
    for path, words in _walk(root, (), ()):
        cases.append(f'        "{" ".join(path)}") opts="{" ".join(words)}" ;;')
    if root.sub_commands and not declares_command(root, COMPLETION_COMMAND):
        cases.append(
            f'        "{COMPLETION_COMMAND}") opts="{" ".join(COMPLETION_SHELLS)}" ;;'
        )

    return "\n".join(
        [
            f"# bash completion for {prog}",
            f"{function}()",
            "{",
            "    local cur path word opts",
            '    cur="${COMP_WORDS[COMP_CWORD]}"',
            '    path=""',
            '    for word in "${COMP_WORDS[@]:1:COMP_CWORD-1}"; do',
            '        case "$word" in',
            "            -*) ;;",
            '            *) path="${path:+$path }$word" ;;',
            "        esac",
            "    done",
            '    case "$path" in',
            *cases,
            '        *) opts="" ;;',
            "    esac",
            '    COMPREPLY=( $(compgen -W "$opts" -- "$cur") )',
            "}",
            f"complete -F {function} {prog}",
            "",
        ]
    )


def generate_zsh_completion(root: CommandNode) -> str:
    """Return a ``zsh`` completion script for *root*."""
    prog = root.options.name
    return "\n".join(
        [
            f"#compdef {prog}",
            "autoload -U +X bashcompinit && bashcompinit",
            generate_bash_completion(root),
        ]
    )


def generate_completion(root: CommandNode, shell: str) -> str:
    """Dispatch to the generator for *shell*."""
    if shell == "bash":
        return generate_bash_completion(root)
    if shell == "zsh":
        return generate_zsh_completion(root)
    raise ValueError(f"unsupported shell: {shell}")

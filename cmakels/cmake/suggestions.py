"""
Match help listings against a query and build insertable snippets.

Snippets use the LSP snippet syntax: ``${1}`` is an empty placeholder and
``${1:text}`` a placeholder with default text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from cmakels.cmake.help import CMakeHelp, HelpCategory

# Commands that open a block closed by ``end<command>()``.
BLOCK_COMMANDS = frozenset({"if", "function", "while", "macro", "foreach"})

ANGLE_TOKEN_PATTERN = re.compile(r"<(.*)>")


class MatchMode(Enum):
    PREFIX = "prefix"
    EXACT = "exact"


@dataclass(frozen=True)
class Suggestion:
    """A help entry matched by a query."""

    category: HelpCategory
    label: str
    insert_text: str


def command_insert_text(name: str) -> str:
    if name in BLOCK_COMMANDS:
        return f"{name}(${{1}})\n\t\nend{name}(${{1}})\n"
    return f"{name}(${{1}})"


def placeholder_insert_text(name: str) -> str:
    """Turn ``<LANG>_FLAGS`` into ``${1:<LANG>}_FLAGS``."""
    return ANGLE_TOKEN_PATTERN.sub(lambda m: f"${{1:<{m.group(1)}>}}", name)


def module_insert_text(name: str) -> str:
    if name.startswith("Find"):
        return f"find_package({name[len('Find'):]}${{1: REQUIRED}})"
    return f"include({name})"


INSERT_TEXT_BUILDERS: dict[HelpCategory, Callable[[str], str]] = {
    HelpCategory.COMMAND: command_insert_text,
    HelpCategory.VARIABLE: placeholder_insert_text,
    HelpCategory.PROPERTY: placeholder_insert_text,
    HelpCategory.MODULE: module_insert_text,
}


def is_match(line: str, query: str, mode: MatchMode) -> bool:
    if mode is MatchMode.EXACT:
        return line == query
    return query in line


def build_suggestions(
    category: HelpCategory, names: list[str], query: str, mode: MatchMode
) -> list[Suggestion]:
    """Filter ``names`` and wrap the survivors, keeping listing order."""
    build = INSERT_TEXT_BUILDERS[category]
    return [
        Suggestion(category=category, label=name, insert_text=build(name))
        for name in names
        if is_match(name, query, mode)
    ]


async def match(
    help: CMakeHelp, category: HelpCategory, query: str, mode: MatchMode
) -> list[Suggestion]:
    """
    Suggestions of one category for ``query``.

    PREFIX mode keeps entries containing ``query`` anywhere (an empty query
    keeps everything); EXACT mode keeps entries equal to it.
    """
    names = await help.list(category)
    return build_suggestions(category, names, query, mode)

"""
Access to cmake's built-in help listings.

Each category has a list flag (``--help-command-list``) and a describe
flag (``--help-command NAME``). Nothing is cached: every call spawns cmake.
"""

from __future__ import annotations

from enum import Enum

from cmakels.cmake.cli import CMakeCLI
from cmakels.cmake.errors import HelpNameNotFoundError


class HelpCategory(Enum):
    """A domain of cmake help entries."""

    COMMAND = "command"
    VARIABLE = "variable"
    PROPERTY = "property"
    MODULE = "module"

    @property
    def list_flag(self) -> str:
        return f"--help-{self.value}-list"

    @property
    def help_flag(self) -> str:
        return f"--help-{self.value}"

    @property
    def url_segment(self) -> str:
        """Path segment of the online documentation for this category."""
        return self.value


def parse_listing(output: str) -> list[str]:
    """Split list output into names, dropping blank lines."""
    return [line for line in output.split("\n") if line.strip()]


class CMakeHelp:
    """List and describe cmake commands, variables, properties and modules."""

    def __init__(self, cli: CMakeCLI) -> None:
        self.cli = cli

    async def list_text(self, category: HelpCategory) -> str:
        """Raw output of the category's list invocation."""
        return await self.cli.run([category.list_flag])

    async def list(self, category: HelpCategory) -> list[str]:
        """Names listed for a category, in cmake's order."""
        return parse_listing(await self.list_text(category))

    async def describe(self, category: HelpCategory, name: str) -> str:
        """
        Get the help text for ``name``.

        The name is looked up in the category listing first, and cmake is
        only asked to describe names it lists.

        Raises:
            HelpNameNotFoundError: If the listing does not contain ``name``
        """
        listing = await self.list_text(category)
        if name not in listing:
            raise HelpNameNotFoundError(category, name)

        return await self.cli.run([category.help_flag, name])

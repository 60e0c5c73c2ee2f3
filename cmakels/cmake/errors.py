"""Exceptions raised by the cmake help layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmakels.cmake.help import HelpCategory


class CMakeError(Exception):
    """Base class for all cmake invocation errors."""


class CMakeNotFoundError(CMakeError):
    """The configured cmake executable could not be found."""


class CMakeProcessError(CMakeError):
    """The cmake process could not be started."""


class HelpNameNotFoundError(CMakeError):
    """A describe was requested for a name missing from its listing."""

    def __init__(self, category: HelpCategory, name: str) -> None:
        super().__init__(f"Failed to find {category.value}: {name}")
        self.category = category
        self.name = name

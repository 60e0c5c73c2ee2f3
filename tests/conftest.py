"""Shared fixtures: a fake cmake answering help flags from canned output."""

from __future__ import annotations

import asyncio

import pytest

from cmakels.cmake.aggregator import HelpAggregator
from cmakels.cmake.help import CMakeHelp

COMMAND_LIST = "add_executable\nadd_library\nendif\nforeach\nif\nmessage\nset\n"
VARIABLE_LIST = "CMAKE_BUILD_TYPE\nCMAKE_<LANG>_COMPILER\nCMAKE_VERSION\nPROJECT_NAME\n"
PROPERTY_LIST = "COMPILE_DEFINITIONS\nINCLUDE_DIRECTORIES\nVERSION\n"
MODULE_LIST = "CheckIncludeFile\nFindBoost\nFindZLIB\nGNUInstallDirs\n"

MESSAGE_HELP = (
    "message\n"
    "-------\n"
    "\n"
    "Log a message.\n"
    "\n"
    "  message([<mode>] \"message text\" ...)\n"
)


class FakeCMake:
    """
    Stands in for CMakeCLI.

    ``outputs`` maps a joined argument string to stdout. Every call is
    recorded in ``calls``.
    """

    def __init__(
        self, outputs: dict[str, str | Exception] | None = None, delay: float = 0
    ):
        self.outputs: dict[str, str | Exception] = {
            "--version": "cmake version 3.21.4\n\nCMake suite maintained by Kitware\n",
            "--help-command-list": COMMAND_LIST,
            "--help-variable-list": VARIABLE_LIST,
            "--help-property-list": PROPERTY_LIST,
            "--help-module-list": MODULE_LIST,
            "--help-command message": MESSAGE_HELP,
        }
        self.outputs.update(outputs or {})
        self.delay = delay
        self.calls: list[list[str]] = []

    async def run(self, args):
        self.calls.append(list(args))
        if self.delay:
            await asyncio.sleep(self.delay)

        key = " ".join(args)
        result = self.outputs.get(key, "")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_cmake() -> FakeCMake:
    return FakeCMake()


@pytest.fixture
def cmake_help(fake_cmake: FakeCMake) -> CMakeHelp:
    return CMakeHelp(fake_cmake)  # pyright: ignore


@pytest.fixture
def aggregator(cmake_help: CMakeHelp) -> HelpAggregator:
    return HelpAggregator(cmake_help)

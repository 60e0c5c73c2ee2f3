"""
Async wrapper around the cmake executable.

Every call re-reads the configured command line, so settings changes are
picked up without restarting the server. There is no timeout: a cmake
process that never exits blocks its caller.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Callable, Sequence

from cmakels.cmake.errors import CMakeNotFoundError, CMakeProcessError
from cmakels.config import CMakeSettings

logger = logging.getLogger(__name__)

MISSING_CMAKE_MESSAGE = (
    'The "cmake" command is not found in PATH. Install it or set '
    '"cmakePath" in the cmakels settings to the CMake executable.'
)

# A piece that is a whole token: fully quoted, or neither starting nor
# ending with a quote.
_QUOTED_PIECE = re.compile(r'^"[^"]*"$')
_UNQUOTED_PIECE = re.compile(r'^([^"]|[^"].*?[^"])$')

MissingNotifier = Callable[[str], None]


def _unquote(token: str) -> str:
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1]
    if token.startswith('"'):
        return token[1:]
    return token


def split_command(text: str) -> list[str]:
    """
    Split a configured command line into argv tokens.

    Pieces are separated by spaces. A double-quoted run may span several
    pieces and loses its enclosing quotes.

    Example:
        '"C:/Program Files/CMake/bin/cmake.exe" -Wno-dev'
        -> ['C:/Program Files/CMake/bin/cmake.exe', '-Wno-dev']
    """
    tokens: list[str] = []
    pending: str | None = None

    for piece in text.strip().split(" "):
        if pending is None:
            if not piece:
                continue
            if _QUOTED_PIECE.match(piece) or _UNQUOTED_PIECE.match(piece):
                tokens.append(_unquote(piece))
                continue
            pending = piece
        else:
            pending = f"{pending} {piece}"

        if pending.endswith('"') and (len(pending) > 1 or not pending.startswith('"')):
            tokens.append(_unquote(pending))
            pending = None

    if pending is not None:
        tokens.append(_unquote(pending))

    return tokens


class CMakeCLI:
    """Runs cmake with the configured command line and returns stdout."""

    def __init__(
        self,
        settings: CMakeSettings | None = None,
        on_missing: MissingNotifier | None = None,
    ) -> None:
        """
        Args:
            settings: Shared settings object, read on every call.
            on_missing: Called with a user-facing message each time the
                executable cannot be found.
        """
        self.settings = settings or CMakeSettings()
        self.on_missing = on_missing

    def _notify_missing(self) -> None:
        logger.warning(MISSING_CMAKE_MESSAGE)
        if self.on_missing is not None:
            self.on_missing(MISSING_CMAKE_MESSAGE)

    async def run(self, args: Sequence[str]) -> str:
        """
        Run cmake with ``args`` and return its standard output.

        Carriage returns are removed from the arguments and the output.
        The output is returned whatever the exit code.

        Raises:
            CMakeNotFoundError: If the executable does not exist
            CMakeProcessError: If the process could not be started
        """
        command = split_command(self.settings.cmake_path)
        if not command:
            self._notify_missing()
            raise CMakeNotFoundError("cmake command line is empty")

        cmd = command + [arg.replace("\r", "") for arg in args]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            self._notify_missing()
            raise CMakeNotFoundError(f"cmake executable not found: {command[0]}") from e
        except OSError as e:
            raise CMakeProcessError(f"Failed to start {command[0]}: {e}") from e

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            logger.debug(
                "%s exited with code %s: %s",
                " ".join(cmd),
                process.returncode,
                stderr.decode(errors="replace").strip(),
            )

        return stdout.decode(errors="replace").replace("\r", "")

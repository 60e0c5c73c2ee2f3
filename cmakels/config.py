"""
Server configuration.

Settings are layered, later sources win:

1. Built-in defaults
2. ``CMAKELS_CMAKE_PATH`` environment variable
3. ``.cmakels.yaml`` in the workspace root
4. LSP ``initializationOptions``
5. ``workspace/didChangeConfiguration`` settings

Options may be sent flat (``{"cmakePath": "..."}``) or nested under a
``cmake`` section (``{"cmake": {"cmakePath": "..."}}``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CMAKE_PATH = "cmake"
CMAKE_PATH_ENV = "CMAKELS_CMAKE_PATH"
WORKSPACE_CONFIG_FILE = ".cmakels.yaml"


@dataclass
class CMakeSettings:
    """
    Mutable settings shared by the server and the cmake CLI wrapper.

    Attributes:
        cmake_path: Command line used to invoke cmake. May carry extra
            leading arguments, and quoted paths containing spaces.
    """

    cmake_path: str = DEFAULT_CMAKE_PATH

    def update(self, options: Any) -> None:
        """Apply client options in place, ignoring unknown keys."""
        if not isinstance(options, dict):
            return

        section = options.get("cmake")
        if isinstance(section, dict):
            options = section

        cmake_path = options.get("cmakePath")
        if isinstance(cmake_path, str) and cmake_path.strip():
            self.cmake_path = cmake_path.strip()


def load_workspace_config(workspace_root: Path | None) -> dict:
    """Read ``.cmakels.yaml`` from the workspace root, if present."""
    if workspace_root is None:
        return {}

    config_file = workspace_root / WORKSPACE_CONFIG_FILE
    if not config_file.is_file():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable %s: %s", config_file, e)
        return {}

    return data if isinstance(data, dict) else {}


def load_settings(
    workspace_root: Path | None = None,
    initialization_options: Any = None,
) -> CMakeSettings:
    """Build settings from environment, workspace file and client options."""
    settings = CMakeSettings()

    env_path = os.getenv(CMAKE_PATH_ENV)
    if env_path:
        settings.cmake_path = env_path

    settings.update(load_workspace_config(workspace_root))
    settings.update(initialization_options)

    return settings

from pygls.lsp.server import LanguageServer

from cmakels.cmake.aggregator import HelpAggregator
from cmakels.cmake.cli import CMakeCLI
from cmakels.config import CMakeSettings
from cmakels.lsp.capabilities.capabilities import CapabilityManager


class CMakeLanguageServer(LanguageServer):
    """
    Custom Language Server with cmake-specific attributes.

    Attributes:
        settings: Configuration shared with the cmake CLI wrapper
        cmake_cli: Runs the configured cmake executable
        help_aggregator: Completion, hover and online help lookups
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.settings = CMakeSettings()
        self.cmake_cli: CMakeCLI | None = None
        self.help_aggregator: HelpAggregator | None = None
        self.capability_manager: CapabilityManager | None = None

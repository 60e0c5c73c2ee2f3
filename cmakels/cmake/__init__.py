"""cmake help access for cmakels."""
from .aggregator import CATEGORY_ORDER, HelpAggregator
from .cli import CMakeCLI, split_command
from .errors import (
    CMakeError,
    CMakeNotFoundError,
    CMakeProcessError,
    HelpNameNotFoundError,
)
from .help import CMakeHelp, HelpCategory
from .suggestions import MatchMode, Suggestion

__all__ = [
    "CATEGORY_ORDER",
    "HelpAggregator",
    "CMakeCLI",
    "split_command",
    "CMakeError",
    "CMakeNotFoundError",
    "CMakeProcessError",
    "HelpNameNotFoundError",
    "CMakeHelp",
    "HelpCategory",
    "MatchMode",
    "Suggestion",
]

"""
Fan-out over the four help categories.

Queries run concurrently for every category and results are concatenated
in ``CATEGORY_ORDER``. For lookups the first suggestion in that order is
the canonical match. A failure in any category fails the whole query.
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

from cmakels.cmake.help import CMakeHelp, HelpCategory
from cmakels.cmake.suggestions import MatchMode, Suggestion, match
from cmakels.cmake.version import is_legacy_help_url, resolve_help_url

logger = logging.getLogger(__name__)

CATEGORY_ORDER = (
    HelpCategory.COMMAND,
    HelpCategory.VARIABLE,
    HelpCategory.PROPERTY,
    HelpCategory.MODULE,
)

HOVER_HEADER_LINES = 2
SUMMARY_LINE_INDEX = 3


def strip_angle_brackets(text: str) -> str:
    return text.replace("<", "").replace(">", "")


def search_url(base_url: str, search: str) -> str:
    return f"{base_url}search.html?q={quote(search)}&check_keywords=yes&area=default"


class HelpAggregator:
    """Completion, hover and online help on top of ``CMakeHelp``."""

    def __init__(self, help: CMakeHelp) -> None:
        self.help = help

    async def suggestions(self, query: str, mode: MatchMode) -> list[Suggestion]:
        results = await asyncio.gather(
            *(match(self.help, category, query, mode) for category in CATEGORY_ORDER)
        )
        return [suggestion for result in results for suggestion in result]

    async def completions(self, partial_word: str) -> list[Suggestion]:
        """Every entry containing ``partial_word``, all categories."""
        return await self.suggestions(partial_word, MatchMode.PREFIX)

    async def lookup(self, word: str) -> Suggestion | None:
        """The canonical exact match for ``word``, or None."""
        suggestions = await self.suggestions(word, MatchMode.EXACT)
        if not suggestions:
            return None
        return suggestions[0]

    async def hover_for(self, word: str) -> str | None:
        """Help text for ``word`` without its two-line header."""
        suggestion = await self.lookup(word)
        if suggestion is None:
            return None

        text = await self.help.describe(suggestion.category, suggestion.label)
        return "\n".join(text.split("\n")[HOVER_HEADER_LINES:])

    async def documentation_summary(self, category: HelpCategory, label: str) -> str:
        """One-line summary of an entry, used to resolve completion items."""
        lines = (await self.help.describe(category, label)).split("\n")
        if len(lines) <= SUMMARY_LINE_INDEX:
            return ""
        return lines[SUMMARY_LINE_INDEX]

    async def online_help_url(self, search: str) -> str:
        """
        Documentation URL for ``search``.

        Modern documentation gets a per-entry page, legacy documentation an
        anchor in its single page. Properties and unknown words fall back
        to the documentation search page.
        """
        url, suggestion = await asyncio.gather(
            resolve_help_url(self.help.cli), self.lookup(search)
        )
        legacy = is_legacy_help_url(url)
        search = strip_angle_brackets(search)

        if suggestion is None:
            if legacy or not search:
                return url
            return search_url(url, search)

        # TODO: pick the property page from its scope (target, source, ...)
        # instead of searching.
        if suggestion.category is HelpCategory.PROPERTY:
            return url if legacy else search_url(url, search)

        segment = suggestion.category.url_segment
        if legacy:
            return f"{url}#{segment}:{search}"
        return f"{url}{segment}/{search}.html"

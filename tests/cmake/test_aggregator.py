"""Tests for the four-category help aggregator."""
from __future__ import annotations

import asyncio

import pytest

from cmakels.cmake.aggregator import CATEGORY_ORDER, HelpAggregator
from cmakels.cmake.errors import CMakeProcessError, HelpNameNotFoundError
from cmakels.cmake.help import CMakeHelp, HelpCategory
from cmakels.cmake.suggestions import MatchMode
from cmakels.cmake.version import HELP_BASE_URL

from conftest import MESSAGE_HELP, FakeCMake


def _aggregator(outputs: dict | None = None, delay: float = 0) -> HelpAggregator:
    return HelpAggregator(CMakeHelp(FakeCMake(outputs, delay=delay)))  # pyright: ignore


def test_category_order():
    assert CATEGORY_ORDER == (
        HelpCategory.COMMAND,
        HelpCategory.VARIABLE,
        HelpCategory.PROPERTY,
        HelpCategory.MODULE,
    )


# =============================================================================
# Completion mode
# =============================================================================


@pytest.mark.asyncio
async def test_completions_concatenate_in_category_order(aggregator: HelpAggregator):
    suggestions = await aggregator.completions("VERSION")

    assert [(s.category, s.label) for s in suggestions] == [
        (HelpCategory.VARIABLE, "CMAKE_VERSION"),
        (HelpCategory.PROPERTY, "VERSION"),
    ]


@pytest.mark.asyncio
async def test_completions_with_empty_word_return_everything(
    aggregator: HelpAggregator, cmake_help: CMakeHelp
):
    suggestions = await aggregator.completions("")

    expected = []
    for category in CATEGORY_ORDER:
        expected.extend(await cmake_help.list(category))
    assert [s.label for s in suggestions] == expected


@pytest.mark.asyncio
async def test_same_name_in_two_categories_is_not_deduplicated():
    aggregator = _aggregator(
        {
            "--help-variable-list": "VERSION\n",
            "--help-property-list": "VERSION\n",
        }
    )

    suggestions = await aggregator.completions("VERSION")

    assert [s.category for s in suggestions] == [
        HelpCategory.VARIABLE,
        HelpCategory.PROPERTY,
    ]


@pytest.mark.asyncio
async def test_completions_fail_when_one_category_fails():
    aggregator = _aggregator({"--help-module-list": CMakeProcessError("boom")})

    with pytest.raises(CMakeProcessError):
        await aggregator.completions("")


@pytest.mark.asyncio
async def test_concurrent_completions_do_not_interfere():
    aggregator = _aggregator(delay=0.01)

    add_results, cmake_results = await asyncio.gather(
        aggregator.completions("add_"),
        aggregator.completions("CMAKE_"),
    )

    assert [s.label for s in add_results] == ["add_executable", "add_library"]
    assert [s.label for s in cmake_results] == [
        "CMAKE_BUILD_TYPE",
        "CMAKE_<LANG>_COMPILER",
        "CMAKE_VERSION",
    ]


# =============================================================================
# Lookup mode
# =============================================================================


@pytest.mark.asyncio
async def test_exact_mode_without_matches_is_empty(aggregator: HelpAggregator):
    assert await aggregator.suggestions("no_such_thing", MatchMode.EXACT) == []
    assert await aggregator.lookup("no_such_thing") is None


@pytest.mark.asyncio
async def test_lookup_first_category_wins():
    aggregator = _aggregator(
        {
            "--help-variable-list": "VERSION\n",
            "--help-property-list": "VERSION\n",
        }
    )

    suggestion = await aggregator.lookup("VERSION")

    assert suggestion is not None
    assert suggestion.category is HelpCategory.VARIABLE


@pytest.mark.asyncio
async def test_hover_drops_header_lines(aggregator: HelpAggregator):
    text = await aggregator.hover_for("message")

    assert text == "\n".join(MESSAGE_HELP.split("\n")[2:])
    assert text.startswith("\nLog a message.")


@pytest.mark.asyncio
async def test_hover_without_match(aggregator: HelpAggregator):
    assert await aggregator.hover_for("not_a_command") is None


@pytest.mark.asyncio
async def test_documentation_summary(aggregator: HelpAggregator):
    summary = await aggregator.documentation_summary(HelpCategory.COMMAND, "message")

    assert summary == "Log a message."


@pytest.mark.asyncio
async def test_documentation_summary_of_short_text():
    aggregator = _aggregator({"--help-command set": "set\n---\n"})

    assert await aggregator.documentation_summary(HelpCategory.COMMAND, "set") == ""


@pytest.mark.asyncio
async def test_documentation_summary_of_unlisted_name(aggregator: HelpAggregator):
    with pytest.raises(HelpNameNotFoundError):
        await aggregator.documentation_summary(HelpCategory.MODULE, "FindNothing")


# =============================================================================
# Online help URLs
# =============================================================================


class TestOnlineHelpUrl:
    @pytest.mark.asyncio
    async def test_command_page(self, aggregator: HelpAggregator):
        url = await aggregator.online_help_url("message")

        assert url == HELP_BASE_URL + "v3.21/command/message.html"

    @pytest.mark.asyncio
    async def test_module_page(self, aggregator: HelpAggregator):
        url = await aggregator.online_help_url("FindZLIB")

        assert url == HELP_BASE_URL + "v3.21/module/FindZLIB.html"

    @pytest.mark.asyncio
    async def test_angle_brackets_are_stripped(self, aggregator: HelpAggregator):
        url = await aggregator.online_help_url("CMAKE_<LANG>_COMPILER")

        assert url == HELP_BASE_URL + "v3.21/variable/CMAKE_LANG_COMPILER.html"

    @pytest.mark.asyncio
    async def test_property_uses_search(self, aggregator: HelpAggregator):
        url = await aggregator.online_help_url("COMPILE_DEFINITIONS")

        assert url == (
            HELP_BASE_URL
            + "v3.21/search.html?q=COMPILE_DEFINITIONS&check_keywords=yes&area=default"
        )

    @pytest.mark.asyncio
    async def test_unknown_word_uses_search(self, aggregator: HelpAggregator):
        url = await aggregator.online_help_url("<frobnicate>")

        assert url == (
            HELP_BASE_URL + "v3.21/search.html?q=frobnicate&check_keywords=yes&area=default"
        )

    @pytest.mark.asyncio
    async def test_empty_search_opens_root(self, aggregator: HelpAggregator):
        assert await aggregator.online_help_url("") == HELP_BASE_URL + "v3.21/"

    @pytest.mark.asyncio
    async def test_legacy_anchor(self):
        aggregator = _aggregator({"--version": "cmake version 2.8.12\n"})

        url = await aggregator.online_help_url("message")

        assert url == HELP_BASE_URL + "v2.8.12/cmake.html#command:message"

    @pytest.mark.asyncio
    async def test_legacy_property_and_unknown_open_root(self):
        aggregator = _aggregator({"--version": "cmake version 2.8.12\n"})
        root = HELP_BASE_URL + "v2.8.12/cmake.html"

        assert await aggregator.online_help_url("VERSION") == root
        assert await aggregator.online_help_url("frobnicate") == root

    @pytest.mark.asyncio
    async def test_missing_version_uses_latest(self):
        aggregator = _aggregator({"--version": ""})

        url = await aggregator.online_help_url("if")

        assert url == HELP_BASE_URL + "latest/command/if.html"

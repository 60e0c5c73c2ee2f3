"""
cmake help LSP capabilities.

Provides completion, completion item documentation, hover and online help
for cmake commands, variables, properties and modules.
"""

from __future__ import annotations

from typing import Any

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    Hover,
    HoverParams,
    InsertTextFormat,
    LogMessageParams,
    MarkupContent,
    MarkupKind,
    MessageType,
    Position,
    ShowDocumentParams,
)
from pygls.workspace.position_codec import PositionCodec

from cmakels.cmake.help import HelpCategory
from cmakels.cmake.suggestions import Suggestion
from cmakels.lsp.capabilities.capabilities import (
    CommandCapability,
    CompletionCapability,
    HoverCapability,
)
from cmakels.utils.words import get_word_at_position, get_word_before_position

ONLINE_HELP_COMMAND = "cmake.onlineHelp"

COMPLETION_ITEM_KINDS = {
    HelpCategory.COMMAND: CompletionItemKind.Function,
    HelpCategory.VARIABLE: CompletionItemKind.Variable,
    HelpCategory.PROPERTY: CompletionItemKind.Property,
    HelpCategory.MODULE: CompletionItemKind.Module,
}


def _line_and_column(server, uri: str, position: Position) -> tuple[str, int]:
    """
    The line at ``position`` and the cursor as an index into that line.

    LSP characters count UTF-16 code units, so they are converted with the
    document's position codec before indexing a Python string.
    """
    doc = server.workspace.get_text_document(uri)
    lines = list(doc.lines)
    if position.line >= len(lines):
        return "", 0

    codec = getattr(doc, "position_codec", None)
    if not isinstance(codec, PositionCodec):
        codec = PositionCodec()

    column = codec.position_from_client_units(lines, position).character
    return lines[position.line], column


def _as_position(value: Any) -> Position | None:
    if isinstance(value, Position):
        return value
    if isinstance(value, dict) and "line" in value and "character" in value:
        return Position(line=int(value["line"]), character=int(value["character"]))
    return None


def to_completion_item(suggestion: Suggestion) -> CompletionItem:
    return CompletionItem(
        label=suggestion.label,
        kind=COMPLETION_ITEM_KINDS[suggestion.category],
        detail=suggestion.category.value,
        insert_text=suggestion.insert_text,
        insert_text_format=InsertTextFormat.Snippet,
        data={"category": suggestion.category.value, "label": suggestion.label},
    )


class CMakeCompletionCapability(CompletionCapability):
    """Completes cmake help entries containing the word before the cursor."""

    @property
    def name(self) -> str:
        return "cmake_completion"

    @property
    def description(self) -> str:
        return "Autocomplete cmake commands, variables, properties and modules"

    async def can_handle(self, params: CompletionParams) -> bool:
        return self.help_aggregator is not None

    async def complete(self, params: CompletionParams) -> CompletionList:
        line, column = _line_and_column(
            self.server, params.text_document.uri, params.position
        )
        partial_word = get_word_before_position(line, column)

        suggestions = await self.help_aggregator.completions(partial_word)

        # Clients re-request on every keystroke.
        return CompletionList(
            is_incomplete=True,
            items=[to_completion_item(suggestion) for suggestion in suggestions],
        )

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        """Add the one-line summary from cmake's help as documentation."""
        data = item.data
        if self.help_aggregator is None or not isinstance(data, dict):
            return item

        try:
            category = HelpCategory(data.get("category"))
        except ValueError:
            return item

        item.documentation = await self.help_aggregator.documentation_summary(
            category, data.get("label", item.label)
        )
        return item


class CMakeHoverCapability(HoverCapability):
    """Shows cmake's help text for the word under the cursor."""

    @property
    def name(self) -> str:
        return "cmake_hover"

    @property
    def description(self) -> str:
        return "Show cmake documentation on hover"

    async def can_handle(self, params: HoverParams) -> bool:
        return self.help_aggregator is not None

    async def hover(self, params: HoverParams) -> Hover | None:
        line, column = _line_and_column(
            self.server, params.text_document.uri, params.position
        )
        word = get_word_at_position(line, column)
        if not word:
            return None

        text = await self.help_aggregator.hover_for(word)
        if text is None:
            return None

        return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=text))


class CMakeOnlineHelpCapability(CommandCapability):
    """Opens the online cmake documentation for a search term."""

    @property
    def name(self) -> str:
        return "cmake_online_help"

    @property
    def description(self) -> str:
        return "Open the cmake online documentation in the browser"

    @property
    def command(self) -> str:
        return ONLINE_HELP_COMMAND

    def _search_term(self, args: tuple) -> str:
        """
        Search term from the command arguments.

        Accepted forms:
            ("add_library",)
            ("file:///CMakeLists.txt", {"line": 3, "character": 5})
            ({"search": "", "textDocument": {"uri": ...}, "position": {...}},)

        Without an explicit term, the word under the given position is used.
        """
        search = ""
        uri = None
        position = None

        if len(args) >= 2 and isinstance(args[0], str) and _as_position(args[1]):
            uri, position = args[0], _as_position(args[1])
        elif args and isinstance(args[0], str):
            search = args[0]
        elif args and isinstance(args[0], dict):
            options = args[0]
            search = options.get("search") or ""
            text_document = options.get("textDocument")
            if isinstance(text_document, dict):
                uri = text_document.get("uri")
            position = _as_position(options.get("position"))

        search = search.strip()
        if not search and uri and position is not None:
            line, column = _line_and_column(self.server, uri, position)
            search = get_word_at_position(line, column)

        return search

    async def execute(self, *args: Any) -> str | None:
        """
        Open the documentation page for a search term on the client.

        Returns the URL that was opened.
        """
        if self.help_aggregator is None:
            return None

        url = await self.help_aggregator.online_help_url(self._search_term(args))

        self.server.window_log_message(
            LogMessageParams(MessageType.Info, f"Opening cmake help: {url}")
        )
        await self.server.window_show_document_async(
            ShowDocumentParams(uri=url, external=True)
        )
        return url

"""
LSP Capabilities Manager

This module manages LSP feature handlers (completion, hover, commands) using
a plugin architecture.

Design Principles:
1. Plugin-based (add capabilities without modifying core)
2. Type-safe (abstract base class)
3. Composable (multiple handlers for same feature)
4. Testable (isolated capability handlers)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from lsprotocol.types import (
    CompletionItem,
    CompletionList,
    CompletionParams,
    Hover,
    HoverParams,
    LogMessageParams,
    MessageType,
)

from cmakels.cmake.errors import CMakeError

if TYPE_CHECKING:
    from cmakels.lsp.cmake_language_server import CMakeLanguageServer


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability can handle one or more LSP features (completion, hover, etc.)
    and decides whether it can handle a specific request based on context.
    """

    def __init__(self, server: CMakeLanguageServer) -> None:
        self.server = server
        self.help_aggregator = server.help_aggregator

    def register(self) -> None:
        """
        Register extra LSP handlers with the server.

        Called once by CapabilityManager.register_all().
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this capability does."""
        pass

    @abstractmethod
    async def can_handle(self, params) -> bool:
        """Check if the capability can handle the request."""
        pass


class CompletionCapability(Capability):
    """Base class for completion capabilities."""

    @abstractmethod
    async def can_handle(self, params: CompletionParams) -> bool:
        """
        Check if this capability can handle the completion request.

        Returns True if this capability should provide completions
        for the current context.
        """
        pass

    @abstractmethod
    async def complete(self, params: CompletionParams) -> CompletionList:
        """
        Provide completion items.

        Only called if can_handle() returns True.
        """
        pass

    async def resolve(self, item: CompletionItem) -> CompletionItem:
        """
        Fill in lazily computed fields of a completion item.

        By default, returns the item unchanged.
        """
        return item


class HoverCapability(Capability):
    """Base class for hover capabilities."""

    @abstractmethod
    async def can_handle(self, params: HoverParams) -> bool:
        """Check if this capability can handle the hover request."""
        pass

    @abstractmethod
    async def hover(self, params: HoverParams) -> Hover | None:
        """Provide hover information."""
        pass


class CommandCapability(Capability):
    """Base class for capabilities exposed as workspace/executeCommand."""

    @property
    @abstractmethod
    def command(self) -> str:
        """Command identifier, e.g. ``cmake.onlineHelp``."""
        pass

    async def can_handle(self, params) -> bool:
        return params == self.command

    @abstractmethod
    async def execute(self, *args: Any) -> Any:
        """Run the command with the client supplied arguments."""
        pass


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        # In server initialization
        manager = CapabilityManager(server)
        manager.register_all()
    """

    def __init__(
        self,
        server: CMakeLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server

        # Default capabilities
        if capabilities is None:
            from cmakels.lsp.capabilities.cmake_capabilities import (
                CMakeCompletionCapability,
                CMakeHoverCapability,
                CMakeOnlineHelpCapability,
            )

            capabilities = {
                "cmake_completion": CMakeCompletionCapability(server),
                "cmake_hover": CMakeHoverCapability(server),
                "cmake_online_help": CMakeOnlineHelpCapability(server),
            }

        self.capabilities = capabilities
        self._registered = False

    def register_all(self) -> None:
        """Register all capabilities with the server."""
        if self._registered:
            return

        for capability in self.capabilities.values():
            capability.register()

        self._registered = True

    def get_capability(self, name: str) -> Capability | None:
        """Get a specific capability by name"""
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    def _log_error(self, capability: Capability, error: Exception) -> None:
        self.server.window_log_message(
            LogMessageParams(
                type=MessageType.Error,
                message=f"{capability.name} failed: {error}",
            )
        )

    async def handle_completion(self, params: CompletionParams) -> CompletionList:
        """
        Handle completion requests by delegating to capable handlers.

        This aggregates results from all completion capabilities that
        can handle the request.
        """
        all_items = []

        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.complete(params)  # pyright: ignore
                    all_items.extend(result.items)
            except CMakeError as e:
                self._log_error(capability, e)

        return CompletionList(is_incomplete=False, items=all_items)

    async def resolve_completion_item(self, item: CompletionItem) -> CompletionItem:
        """Let every completion capability fill in the item."""
        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                item = await capability.resolve(item)  # pyright: ignore
            except CMakeError as e:
                self._log_error(capability, e)

        return item

    async def handle_hover(self, params: HoverParams) -> Hover | None:
        """
        Handle hover requests by delegating to capable handlers.

        Returns the first non-None hover result
        """
        for capability in self.get_capabilities_by_type(HoverCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.hover(params)  # pyright: ignore
                    if result:
                        return result
            except CMakeError as e:
                self._log_error(capability, e)

        return None

    async def execute_command(self, command: str, *args: Any) -> Any:
        """Run the command capability registered for ``command``."""
        for capability in self.get_capabilities_by_type(CommandCapability):
            if await capability.can_handle(command):
                try:
                    return await capability.execute(*args)  # pyright: ignore
                except CMakeError as e:
                    self._log_error(capability, e)
                    return None

        return None

from pathlib import Path

from pygls.uris import to_fs_path
from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_HOVER,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    CompletionItem,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeConfigurationParams,
    HoverParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
    ShowMessageParams,
)

from cmakels.cmake.aggregator import HelpAggregator
from cmakels.cmake.cli import CMakeCLI
from cmakels.cmake.errors import CMakeError
from cmakels.cmake.help import CMakeHelp
from cmakels.cmake.version import resolve_version
from cmakels.config import load_settings
from cmakels.lsp.capabilities.capabilities import CapabilityManager
from cmakels.lsp.capabilities.cmake_capabilities import ONLINE_HELP_COMMAND
from cmakels.lsp.cmake_language_server import CMakeLanguageServer

SERVER_NAME = "cmakels"
SERVER_VERSION = "0.1.0"


def _workspace_root(params: InitializeParams) -> Path | None:
    if params.root_uri:
        fs_path = to_fs_path(params.root_uri)
        if fs_path:
            return Path(fs_path)
    if params.root_path:
        return Path(params.root_path)
    return None


async def initialize_server(ls: CMakeLanguageServer, params: InitializeParams):
    """
    Load settings and wire the cmake help pipeline.
    """
    ls.settings = load_settings(_workspace_root(params), params.initialization_options)

    def notify_missing(message: str) -> None:
        ls.window_show_message(ShowMessageParams(MessageType.Info, message))

    ls.cmake_cli = CMakeCLI(ls.settings, on_missing=notify_missing)
    ls.help_aggregator = HelpAggregator(CMakeHelp(ls.cmake_cli))

    ls.capability_manager = CapabilityManager(ls)
    ls.capability_manager.register_all()

    try:
        version = await resolve_version(ls.cmake_cli)
    except CMakeError as e:
        ls.window_log_message(LogMessageParams(MessageType.Warning, str(e)))
        return

    ls.window_log_message(
        LogMessageParams(
            MessageType.Info,
            f"Using {ls.settings.cmake_path} (version {version or 'unknown'})",
        )
    )


def create_server() -> CMakeLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Notifications and event handling
    """
    server = CMakeLanguageServer(SERVER_NAME, SERVER_VERSION)

    @server.feature(INITIALIZE)
    async def initialize(ls: CMakeLanguageServer, params: InitializeParams):
        await initialize_server(ls, params)

    @server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
    def did_change_configuration(
        ls: CMakeLanguageServer, params: DidChangeConfigurationParams
    ):
        ls.settings.update(params.settings)

    # Register aggregated handlers
    @server.feature(
        TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=True)
    )
    async def completion(ls: CMakeLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    @server.feature(COMPLETION_ITEM_RESOLVE)
    async def completion_item_resolve(ls: CMakeLanguageServer, item: CompletionItem):
        if ls.capability_manager:
            return await ls.capability_manager.resolve_completion_item(item)
        return item

    @server.feature(TEXT_DOCUMENT_HOVER)
    async def hover(ls: CMakeLanguageServer, params: HoverParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_hover(params)
        return None

    @server.command(ONLINE_HELP_COMMAND)
    async def online_help(ls: CMakeLanguageServer, *args):
        if ls.capability_manager:
            return await ls.capability_manager.execute_command(
                ONLINE_HELP_COMMAND, *args
            )
        return None

    return server

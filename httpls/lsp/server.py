from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)

from httpls.document.store import DocumentStore
from httpls.lsp.capabilities.capabilities import CapabilityManager
from httpls.lsp.http_language_server import HttpLanguageServer
from httpls.lsp.settings import ServerSettings
from httpls.lsp.text_sync_manager import TextSyncManager


# Characters that re-trigger completion mid-line ('#', '@' directives, ':' values)
TRIGGER_CHARACTERS = ["#", "@", ":", " "]


def create_server() -> HttpLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Notifications and event handling
    """
    server = HttpLanguageServer("httpls", "0.1.0")

    # TextSyncManager goes first so the document store can register its hooks
    server.text_sync_manager = TextSyncManager(server)
    server.text_sync_manager.register_handlers()

    server.document_store = DocumentStore(server)
    server.document_store.register_text_sync_hooks()

    server.capability_manager = CapabilityManager(server)
    server.capability_manager.register_all()

    @server.feature(INITIALIZE)
    async def initialize(ls: HttpLanguageServer, params: InitializeParams):
        """Read the client settings."""
        ls.settings = ServerSettings.from_initialization_options(
            params.initialization_options
        )
        ls.window_log_message(
            LogMessageParams(MessageType.Info, f"httpls settings: {ls.settings}")
        )

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=TRIGGER_CHARACTERS),
    )
    async def completion(ls: HttpLanguageServer, params: CompletionParams):
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return CompletionList(is_incomplete=False, items=[])

    return server

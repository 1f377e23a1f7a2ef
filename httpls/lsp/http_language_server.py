from pygls.lsp.server import LanguageServer

from httpls.document.store import DocumentStore
from httpls.lsp.capabilities.capabilities import CapabilityManager
from httpls.lsp.settings import ServerSettings
from httpls.lsp.text_sync_manager import TextSyncManager


class HttpLanguageServer(LanguageServer):
    """
    Custom Language Server with .http document attributes.

    Attributes:
        settings: Client settings from the initialization options
        document_store: Parsed models of the open documents
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.settings = ServerSettings()
        self.document_store: DocumentStore | None = None
        self.capability_manager: CapabilityManager | None = None
        self.text_sync_manager: TextSyncManager | None = None

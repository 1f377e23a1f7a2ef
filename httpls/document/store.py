"""
Document Store

Caches parsed HttpFile models per document URI so completion requests
don't re-parse the document on every keystroke. Entries are keyed by the
document version and dropped through text sync hooks when the document
changes or closes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    LogMessageParams,
    MessageType,
)

from httpls.document.model import HttpFile
from httpls.document.parser import parse_document

if TYPE_CHECKING:
    from httpls.lsp.http_language_server import HttpLanguageServer


@dataclass
class CachedHttpFile:
    version: int | None
    http_file: HttpFile


class DocumentStore:
    """
    Owns the structural model of every open .http document.

    Usage:
        store = DocumentStore(server)
        store.register_text_sync_hooks()

        http_file = await store.get_http_file(uri)
    """

    def __init__(self, server: HttpLanguageServer) -> None:
        self.server = server
        self._files: dict[str, CachedHttpFile] = {}

    def register_text_sync_hooks(self) -> None:
        """Drop cached models when their document changes or closes."""
        text_sync = self.server.text_sync_manager
        if text_sync is None:
            return
        text_sync.add_on_change_hook(self._on_document_changed)
        text_sync.add_on_close_hook(self._on_document_closed)

    async def get_http_file(self, uri: str) -> HttpFile | None:
        """
        Return the parsed model of a document, parsing it if needed.

        Returns None when the document is unknown to the workspace or
        cannot be parsed.
        """
        try:
            document = self.server.workspace.get_text_document(uri)
            source = document.source
        except Exception as e:
            self._log(MessageType.Warning, f"Document not available {uri}: {e}")
            return None

        cached = self._files.get(uri)
        if cached is not None and cached.version == document.version:
            return cached.http_file

        try:
            http_file = parse_document(uri, source)
        except Exception as e:
            self._log(
                MessageType.Error,
                f"Failed to parse {uri}: {type(e).__name__}: {e}",
            )
            return None

        self._files[uri] = CachedHttpFile(version=document.version, http_file=http_file)
        return http_file

    def invalidate(self, uri: str) -> None:
        self._files.pop(uri, None)

    def __contains__(self, uri: str) -> bool:
        return uri in self._files

    async def _on_document_changed(self, params: DidChangeTextDocumentParams) -> None:
        self.invalidate(params.text_document.uri)

    async def _on_document_closed(self, params: DidCloseTextDocumentParams) -> None:
        self.invalidate(params.text_document.uri)

    def _log(self, message_type: MessageType, message: str) -> None:
        self.server.window_log_message(
            LogMessageParams(type=message_type, message=message)
        )

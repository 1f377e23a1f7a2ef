"""
Text Synchronization Manager

Manages LSP text sync events and provides hook extension points so the
document store (and anything else) can react to document lifecycle
events.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from lsprotocol.types import (
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    LogMessageParams,
    MessageType,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
)

if TYPE_CHECKING:
    from httpls.lsp.http_language_server import HttpLanguageServer


# Type aliases for hook signatures
OnOpenHook = Callable[[DidOpenTextDocumentParams], Awaitable[None]]
OnChangeHook = Callable[[DidChangeTextDocumentParams], Awaitable[None]]
OnSaveHook = Callable[[DidSaveTextDocumentParams], Awaitable[None]]
OnCloseHook = Callable[[DidCloseTextDocumentParams], Awaitable[None]]


class TextSyncManager:
    """
    Manages text document synchronization and hook broadcasting.

    Design Principles:
    - Text sync is infrastructure, NOT a capability
    - Errors are isolated (one hook failure doesn't affect others)
    - Hooks run in registration order

    Usage:
        text_sync = TextSyncManager(server)
        text_sync.register_handlers()
        server.text_sync_manager = text_sync

        # The document store drops stale models on change
        text_sync.add_on_change_hook(store._on_document_changed)
    """

    def __init__(self, server: HttpLanguageServer) -> None:
        self.server = server

        self._on_open_hooks: list[OnOpenHook] = []
        self._on_change_hooks: list[OnChangeHook] = []
        self._on_save_hooks: list[OnSaveHook] = []
        self._on_close_hooks: list[OnCloseHook] = []

    def add_on_open_hook(self, hook: OnOpenHook) -> None:
        self._on_open_hooks.append(hook)

    def add_on_change_hook(self, hook: OnChangeHook) -> None:
        """
        Register a hook for document change events.

        Warning:
            Change hooks run on every keystroke. Only use them to mark
            or invalidate cached state, never to re-parse.
        """
        self._on_change_hooks.append(hook)

    def add_on_save_hook(self, hook: OnSaveHook) -> None:
        self._on_save_hooks.append(hook)

    def add_on_close_hook(self, hook: OnCloseHook) -> None:
        self._on_close_hooks.append(hook)

    async def _broadcast(
        self, event: str, hooks: Sequence[Callable[[Any], Awaitable[None]]], params: Any
    ) -> None:
        """
        Call every hook of an event with the notification params.

        Errors are caught and logged so a failing hook never stops the
        ones registered after it.
        """
        for hook in hooks:
            try:
                await hook(params)
            except Exception as e:
                self.server.window_log_message(
                    LogMessageParams(
                        type=MessageType.Error,
                        message=f"Error in {event} hook {getattr(hook, '__name__', hook)}: "
                                f"{type(e).__name__}: {e}"
                    )
                )

    def _log_event(self, event: str, uri: str) -> None:
        if not self.server.settings.log_document_events:
            return
        self.server.window_log_message(
            LogMessageParams(type=MessageType.Log, message=f"Document {event}: {uri}")
        )

    def register_handlers(self) -> None:
        """
        Register LSP handlers for:
        - textDocument/didOpen
        - textDocument/didChange
        - textDocument/didSave
        - textDocument/didClose

        pygls updates ls.workspace before these handlers run.
        """

        @self.server.feature(TEXT_DOCUMENT_DID_OPEN)
        async def did_open(
            ls: HttpLanguageServer,
            params: DidOpenTextDocumentParams,
        ) -> None:
            self._log_event("opened", params.text_document.uri)
            await self._broadcast("on_open", self._on_open_hooks, params)

        @self.server.feature(TEXT_DOCUMENT_DID_CHANGE)
        async def did_change(
            ls: HttpLanguageServer,
            params: DidChangeTextDocumentParams,
        ) -> None:
            self._log_event("changed", params.text_document.uri)
            await self._broadcast("on_change", self._on_change_hooks, params)

        @self.server.feature(TEXT_DOCUMENT_DID_SAVE)
        async def did_save(
            ls: HttpLanguageServer,
            params: DidSaveTextDocumentParams,
        ) -> None:
            self._log_event("saved", params.text_document.uri)
            await self._broadcast("on_save", self._on_save_hooks, params)

        @self.server.feature(TEXT_DOCUMENT_DID_CLOSE)
        async def did_close(
            ls: HttpLanguageServer,
            params: DidCloseTextDocumentParams,
        ) -> None:
            self._log_event("closed", params.text_document.uri)
            await self._broadcast("on_close", self._on_close_hooks, params)

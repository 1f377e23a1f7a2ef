"""
Completion capability for .http documents.

Adapts the CompletionEngine to LSP: extracts the text before the cursor,
converts candidates to CompletionItems and reports engine failures
through the server's log and notification channels.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    DidCloseTextDocumentParams,
    LogMessageParams,
    MessageType,
    ShowMessageParams,
)

from httpls.completion.candidate import CandidateKind, CompletionCandidate
from httpls.completion.engine import (
    CompletionEngine,
    CompletionErrorKind,
    CompletionOutcome,
    CompletionRequest,
)
from httpls.lsp.capabilities.capabilities import CompletionCapability

if TYPE_CHECKING:
    from httpls.lsp.http_language_server import HttpLanguageServer


CANDIDATE_ITEM_KINDS: dict[CandidateKind, CompletionItemKind] = {
    CandidateKind.KEYWORD: CompletionItemKind.Keyword,
    CandidateKind.FIELD: CompletionItemKind.Field,
    CandidateKind.VALUE: CompletionItemKind.Value,
    CandidateKind.REFERENCE: CompletionItemKind.Reference,
}


class HttpCompletionCapability(CompletionCapability):
    """Completes methods, headers, values, directives and region names."""

    def __init__(self, server: HttpLanguageServer) -> None:
        super().__init__(server)
        self.engine = CompletionEngine(server.document_store)
        # Latest request number per document, older requests are superseded
        self._generations: defaultdict[str, int] = defaultdict(int)

    @property
    def name(self) -> str:
        return "http_completion"

    @property
    def description(self) -> str:
        return "Autocomplete request methods, headers, header values, meta-directives and region references"

    def register(self) -> None:
        """Forget request numbers of closed documents."""
        text_sync = self.server.text_sync_manager
        if text_sync is None:
            return
        text_sync.add_on_close_hook(self._on_document_closed)

    async def can_handle(self, params: CompletionParams) -> bool:
        # The client only routes .http documents to this server
        return True

    async def complete(self, params: CompletionParams) -> CompletionList:
        uri = params.text_document.uri
        request = CompletionRequest(
            uri=uri,
            line=params.position.line,
            line_text=self._line_before_cursor(params),
        )

        self._generations[uri] += 1
        generation = self._generations[uri]

        outcome = await self.engine.complete(
            request,
            is_cancelled=lambda: self._generations.get(uri) != generation,
        )
        self._report(outcome)

        return CompletionList(
            is_incomplete=False,
            items=[to_completion_item(c) for c in outcome.candidates],
        )

    async def _on_document_closed(self, params: DidCloseTextDocumentParams) -> None:
        self._generations.pop(params.text_document.uri, None)

    def _line_before_cursor(self, params: CompletionParams) -> str:
        doc = self.server.workspace.get_text_document(params.text_document.uri)
        lines = doc.lines
        if params.position.line >= len(lines):
            return ""
        return lines[params.position.line][: params.position.character]

    def _report(self, outcome: CompletionOutcome) -> None:
        if outcome.error is None or outcome.error == CompletionErrorKind.CANCELLED:
            return

        internal = outcome.error == CompletionErrorKind.INTERNAL
        self.server.window_log_message(
            LogMessageParams(
                type=MessageType.Error if internal else MessageType.Warning,
                message=outcome.detail,
            )
        )

        if internal and self.server.settings.show_notification_popup:
            self.server.window_show_message(
                ShowMessageParams(type=MessageType.Error, message=outcome.detail)
            )


def to_completion_item(candidate: CompletionCandidate) -> CompletionItem:
    return CompletionItem(
        label=candidate.name,
        kind=CANDIDATE_ITEM_KINDS[candidate.kind],
        detail=candidate.description,
        documentation=candidate.description,
        insert_text=candidate.insert_text,
    )

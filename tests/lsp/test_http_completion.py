"""
Tests for httpls/lsp/capabilities/http_completion.py

Covers the LSP adaptation of the completion engine:
- Text before the cursor extraction
- CandidateKind -> CompletionItemKind conversion
- Error reporting through log and notification channels
- Superseded requests
"""
from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, Mock

import pytest
from lsprotocol.types import (
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    DidCloseTextDocumentParams,
    MessageType,
    Position,
    TextDocumentIdentifier,
)

from httpls.completion.candidate import CandidateKind, CompletionCandidate
from httpls.completion.engine import CompletionErrorKind, CompletionOutcome
from httpls.document.store import DocumentStore
from httpls.lsp.capabilities.http_completion import (
    HttpCompletionCapability,
    to_completion_item,
)
from httpls.lsp.http_language_server import HttpLanguageServer
from httpls.lsp.settings import ServerSettings


URI = "file:///test.http"

DOCUMENT = (
    "# @name login\n"
    "POST https://example.com/login\n"
    "Content-Type: app\n"
    "\n"
)


def _text_document(text: str) -> Mock:
    doc = Mock()
    doc.source = text
    doc.lines = text.splitlines(keepends=True)
    doc.version = 1
    return doc


@pytest.fixture
def mock_server() -> MagicMock:
    """Provides a mock HttpLanguageServer with a real document store."""
    server = MagicMock(spec=HttpLanguageServer)
    server.workspace = MagicMock()
    server.workspace.get_text_document.return_value = _text_document(DOCUMENT)
    server.window_log_message = MagicMock()
    server.window_show_message = MagicMock()
    server.settings = ServerSettings()
    server.text_sync_manager = None
    server.document_store = DocumentStore(server)
    return server


@pytest.fixture
def capability(mock_server: MagicMock) -> HttpCompletionCapability:
    return HttpCompletionCapability(mock_server)


def _params(line: int, character: int) -> CompletionParams:
    return CompletionParams(
        text_document=TextDocumentIdentifier(uri=URI),
        position=Position(line=line, character=character),
    )


class TestProperties:

    def test_name(self, capability: HttpCompletionCapability):
        assert capability.name == "http_completion"

    def test_description(self, capability: HttpCompletionCapability):
        assert "headers" in capability.description

    @pytest.mark.asyncio
    async def test_can_handle(self, capability: HttpCompletionCapability):
        assert await capability.can_handle(_params(0, 0))


class TestComplete:

    @pytest.mark.asyncio
    async def test_uses_text_before_cursor(self, capability: HttpCompletionCapability):
        """Only 'Content-Type: app' before the cursor is matched, not the rest of the line."""
        result = await capability.complete(_params(2, len("Content-Type: app")))

        assert isinstance(result, CompletionList)
        assert result.is_incomplete is False
        labels = [item.label for item in result.items]
        assert "application/json" in labels
        assert all(label.startswith("app") for label in labels)
        assert all(item.kind == CompletionItemKind.Value for item in result.items)

    @pytest.mark.asyncio
    async def test_cursor_mid_line(self, capability: HttpCompletionCapability):
        result = await capability.complete(_params(2, 3))

        assert [item.label for item in result.items] == [
            "CONNECT",
            "Connection",
            "Content-Encoding",
            "Content-Length",
            "Content-MD5",
            "Content-Type",
        ]

    @pytest.mark.asyncio
    async def test_line_past_end_of_document(self, capability: HttpCompletionCapability):
        result = await capability.complete(_params(40, 0))

        assert [item.label for item in result.items][:3] == ["GET", "HEAD", "POST"]
        assert len(result.items) == 13

    @pytest.mark.asyncio
    async def test_meta_directive_insert_text(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        mock_server.workspace.get_text_document.return_value = _text_document("# @na\n")

        result = await capability.complete(_params(0, 5))

        item = next(item for item in result.items if item.label == "@name")
        assert item.insert_text == "me"
        assert item.kind == CompletionItemKind.Field


class TestErrorReporting:

    @pytest.mark.asyncio
    async def test_internal_error_logged(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        async def failing_complete(request, is_cancelled=None):
            return CompletionOutcome(error=CompletionErrorKind.INTERNAL, detail="broken")

        capability.engine.complete = failing_complete

        result = await capability.complete(_params(0, 0))

        assert result.items == []
        params = mock_server.window_log_message.call_args[0][0]
        assert params.type == MessageType.Error
        assert params.message == "broken"
        mock_server.window_show_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_internal_error_notification(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        mock_server.settings = ServerSettings(show_notification_popup=True)

        async def failing_complete(request, is_cancelled=None):
            return CompletionOutcome(error=CompletionErrorKind.INTERNAL, detail="broken")

        capability.engine.complete = failing_complete

        await capability.complete(_params(0, 0))

        params = mock_server.window_show_message.call_args[0][0]
        assert params.type == MessageType.Error
        assert params.message == "broken"

    @pytest.mark.asyncio
    async def test_degradation_logged_as_warning(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        mock_server.settings = ServerSettings(show_notification_popup=True)

        async def degraded_complete(request, is_cancelled=None):
            return CompletionOutcome(
                candidates=[CompletionCandidate("GET", "get", CandidateKind.KEYWORD)],
                error=CompletionErrorKind.MODEL_UNAVAILABLE,
                detail="no model",
            )

        capability.engine.complete = degraded_complete

        result = await capability.complete(_params(0, 0))

        assert [item.label for item in result.items] == ["GET"]
        params = mock_server.window_log_message.call_args[0][0]
        assert params.type == MessageType.Warning
        mock_server.window_show_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_not_reported(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        async def cancelled_complete(request, is_cancelled=None):
            return CompletionOutcome(error=CompletionErrorKind.CANCELLED)

        capability.engine.complete = cancelled_complete

        result = await capability.complete(_params(0, 0))

        assert result.items == []
        mock_server.window_log_message.assert_not_called()


@pytest.mark.asyncio
async def test_superseded_request_returns_nothing(
    capability: HttpCompletionCapability, mock_server: MagicMock
):
    """A request whose model wait is overtaken by a newer request is dropped."""
    release = asyncio.Event()
    parsed = mock_server.document_store.get_http_file

    async def slow_get_http_file(uri):
        await release.wait()
        return await parsed(uri)

    capability.engine.document_store = Mock(get_http_file=slow_get_http_file)

    first = asyncio.create_task(capability.complete(_params(0, 0)))
    await asyncio.sleep(0)
    second = asyncio.create_task(capability.complete(_params(0, 0)))
    await asyncio.sleep(0)
    release.set()

    first_result, second_result = await asyncio.gather(first, second)

    assert first_result.items == []
    assert len(second_result.items) == 13


@pytest.mark.asyncio
async def test_requests_on_other_documents_do_not_supersede(
    capability: HttpCompletionCapability, mock_server: MagicMock
):
    release = asyncio.Event()
    parsed = mock_server.document_store.get_http_file

    async def slow_get_http_file(uri):
        await release.wait()
        return await parsed(uri)

    capability.engine.document_store = Mock(get_http_file=slow_get_http_file)

    first = asyncio.create_task(capability.complete(_params(0, 0)))
    await asyncio.sleep(0)
    other = CompletionParams(
        text_document=TextDocumentIdentifier(uri="file:///other.http"),
        position=Position(line=0, character=0),
    )
    second = asyncio.create_task(capability.complete(other))
    await asyncio.sleep(0)
    release.set()

    first_result, second_result = await asyncio.gather(first, second)

    assert len(first_result.items) == 13
    assert len(second_result.items) == 13


class TestClosedDocuments:

    def test_register_adds_close_hook(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        mock_server.text_sync_manager = Mock()

        capability.register()

        mock_server.text_sync_manager.add_on_close_hook.assert_called_once_with(
            capability._on_document_closed
        )

    def test_register_without_text_sync(self, capability: HttpCompletionCapability):
        capability.register()

    @pytest.mark.asyncio
    async def test_close_forgets_request_numbers(self, capability: HttpCompletionCapability):
        await capability.complete(_params(0, 0))
        assert URI in capability._generations

        await capability._on_document_closed(
            DidCloseTextDocumentParams(text_document=TextDocumentIdentifier(uri=URI))
        )

        assert URI not in capability._generations

    @pytest.mark.asyncio
    async def test_close_during_request_cancels_it(
        self, capability: HttpCompletionCapability, mock_server: MagicMock
    ):
        release = asyncio.Event()
        parsed = mock_server.document_store.get_http_file

        async def slow_get_http_file(uri):
            await release.wait()
            return await parsed(uri)

        capability.engine.document_store = Mock(get_http_file=slow_get_http_file)

        pending = asyncio.create_task(capability.complete(_params(0, 0)))
        await asyncio.sleep(0)
        await capability._on_document_closed(
            DidCloseTextDocumentParams(text_document=TextDocumentIdentifier(uri=URI))
        )
        release.set()

        result = await pending

        assert result.items == []
        assert URI not in capability._generations


@pytest.mark.parametrize(
    "kind, item_kind",
    [
        (CandidateKind.KEYWORD, CompletionItemKind.Keyword),
        (CandidateKind.FIELD, CompletionItemKind.Field),
        (CandidateKind.VALUE, CompletionItemKind.Value),
        (CandidateKind.REFERENCE, CompletionItemKind.Reference),
    ],
)
def test_to_completion_item(kind, item_kind):
    item = to_completion_item(CompletionCandidate("name", "description", kind, "ame"))

    assert item.label == "name"
    assert item.kind == item_kind
    assert item.detail == "description"
    assert item.documentation == "description"
    assert item.insert_text == "ame"

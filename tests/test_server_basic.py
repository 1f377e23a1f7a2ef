"""
Basic tests for the .http Language Server.

These tests verify that the server can be created and has the expected features registered.
"""

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
)

from httpls.document.store import DocumentStore
from httpls.lsp.capabilities.http_completion import HttpCompletionCapability
from httpls.lsp.server import create_server
from httpls.lsp.settings import ServerSettings


def test_server_creation():
    """Test that the server can be created successfully."""
    server = create_server()
    assert server is not None
    assert server.name == "httpls"
    assert server.version == "0.1.0"


def test_server_has_completion_feature():
    """Test that completion handler is registered."""
    server = create_server()

    assert TEXT_DOCUMENT_COMPLETION in server.protocol.fm._features


def test_server_has_text_sync_features():
    server = create_server()

    assert TEXT_DOCUMENT_DID_OPEN in server.protocol.fm._features
    assert TEXT_DOCUMENT_DID_CHANGE in server.protocol.fm._features


def test_server_components():
    """Document store and completion capability are wired at creation."""
    server = create_server()

    assert isinstance(server.document_store, DocumentStore)
    assert server.settings == ServerSettings()

    capability = server.capability_manager.get_capability("http_completion")
    assert isinstance(capability, HttpCompletionCapability)
    assert capability.engine.document_store is server.document_store
    assert server.text_sync_manager._on_change_hooks == [server.document_store._on_document_changed]

"""
LSP Capabilities Manager

This module manages LSP feature handlers using a plugin architecture:
each capability decides whether it can handle a request, and the manager
aggregates the results of all capable handlers.

Design Principles:
1. Plugin-based (add capabilities without modifying core)
2. Composable (multiple handlers for same feature)
3. Testable (isolated capability handlers)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionList,
    CompletionParams,
    LogMessageParams,
    MessageType,
)


if TYPE_CHECKING:
    from httpls.lsp.http_language_server import HttpLanguageServer


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability can handle one or more LSP features and decides
    whether it can handle a specific request based on context.
    """

    def __init__(self, server: HttpLanguageServer) -> None:
        self.server = server

    def register(self) -> None:
        """
        Hook the capability into the server.

        Called once during server setup.
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
        pass

    @abstractmethod
    async def complete(self, params: CompletionParams) -> CompletionList:
        """
        Provide completion items.

        Only called if can_handle() returns True.
        """
        pass


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        manager = CapabilityManager(server)
        manager.register_all()

        items = await manager.handle_completion(params)
    """

    def __init__(
        self,
        server: HttpLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server

        if capabilities is None:
            from httpls.lsp.capabilities.http_completion import (
                HttpCompletionCapability,
            )

            capabilities = {
                "http_completion": HttpCompletionCapability(server),
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
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    async def handle_completion(self, params: CompletionParams) -> CompletionList:
        """
        Aggregate the items of every completion capability that can
        handle the request.

        A failing capability is logged and skipped.
        """
        all_items = []

        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                if await capability.can_handle(params):
                    result = await capability.complete(params)  # pyright: ignore
                    all_items.extend(result.items)
            except Exception as e:
                self.server.window_log_message(
                    LogMessageParams(
                        type=MessageType.Error,
                        message=f"Completion error in {capability.name}: {e}"
                    )
                )

        return CompletionList(is_incomplete=False, items=all_items)

"""Document model and parsing for httpls."""
from .model import HttpFile, HttpRegion, HttpRequest, HttpSymbol, SymbolKind
from .store import DocumentStore

__all__ = ['HttpFile', 'HttpRegion', 'HttpRequest', 'HttpSymbol', 'SymbolKind', 'DocumentStore']

"""
Structural model of a parsed .http document.

A document is split into regions (one request each). Every region carries
a symbol tree whose children are tagged by syntactic role, the request it
describes (if any) and the metadata declared in its comment lines.
"""

from dataclasses import dataclass, field
from enum import Enum

from httpls.context.types import RequestVariant


class SymbolKind(Enum):
    """Syntactic role of a symbol within a region."""

    REQUEST_LINE = "requestLine"
    REQUEST_HEADER = "requestHeader"
    META_DATA = "metaData"
    REQUEST_BODY = "requestBody"
    OTHER = "other"


@dataclass
class HttpSymbol:
    """A line range tagged with a syntactic role (0-indexed, inclusive)."""

    name: str
    kind: SymbolKind
    start_line: int
    end_line: int
    children: list["HttpSymbol"] = field(default_factory=list)

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass
class HttpRequest:
    method: str
    url: str
    variant: RequestVariant | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class HttpRegion:
    """One request with its headers and metadata."""

    symbol: HttpSymbol
    request: HttpRequest | None = None
    meta_data: dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        """Symbolic name declared with '# @name', if any."""
        return self.meta_data.get("name") or None


@dataclass
class HttpFile:
    """Parsed document: its URI and regions in document order."""

    uri: str
    regions: list[HttpRegion] = field(default_factory=list)

    def find_region(self, line: int) -> HttpRegion | None:
        """Return the first region whose range covers the given line."""
        for region in self.regions:
            if region.symbol.contains_line(line):
                return region
        return None

    def named_regions(self) -> list[HttpRegion]:
        return [region for region in self.regions if region.name]

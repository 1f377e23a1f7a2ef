"""
Region parser for .http documents.

This is a structural parser only: it tags line ranges with their role so
that completion can tell request lines and header blocks apart from
comments and bodies. It never rejects input, anything it does not
recognise ends up in a body or OTHER symbol.

Layout recognised per region:

    ### optional separator (starts a new region)
    # @name login            <- metadata comments
    POST https://example.com <- request line
    Content-Type: text/plain <- headers until the first blank line

    body...
"""

import re

from httpls.context.types import RequestVariant
from httpls.document.model import (
    HttpFile,
    HttpRegion,
    HttpRequest,
    HttpSymbol,
    SymbolKind,
)


REGION_SEPARATOR = re.compile(r"^\s*###")
COMMENT_PATTERN = re.compile(r"^\s*(#|//)")
META_DATA_PATTERN = re.compile(r"^\s*(?:#|//)\s*@(?P<key>[^\s=]+)\s*(?P<value>.*?)\s*$")
HEADER_PATTERN = re.compile(r"^\s*(?P<name>[^\s:]+)\s*:\s*(?P<value>.*?)\s*$")
REQUEST_LINE_PATTERN = re.compile(
    r"^\s*(?:(?P<method>[A-Za-z]+)\s+)?(?P<url>\S+)(?:\s+HTTP/\S+)?\s*$"
)
URL_PATTERN = re.compile(r"^(?:[a-z][a-z0-9+.-]*://|/|\{\{)", re.IGNORECASE)
QUERY_CONTINUATION = re.compile(r"^\s*[?&]")

HTTP_METHODS = frozenset(
    ["GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"]
)

# Protocol selector keywords -> request variant (WSS has no header vocabulary)
PROTOCOL_METHODS: dict[str, RequestVariant | None] = {
    "MQTT": RequestVariant.MQTT,
    "SSE": RequestVariant.EVENT_SOURCE,
    "GRPC": RequestVariant.GRPC,
    "WS": None,
    "WSS": None,
}

# Scheme of a bare URL -> request variant
URL_SCHEMES: dict[str, RequestVariant | None] = {
    "mqtt": RequestVariant.MQTT,
    "mqtts": RequestVariant.MQTT,
    "ws": None,
    "wss": None,
}


def parse_document(uri: str, text: str) -> HttpFile:
    """Split a document into regions and build each region's symbol tree."""
    lines = [line.rstrip("\r") for line in text.split("\n")]
    http_file = HttpFile(uri=uri)

    start = 0
    for index, line in enumerate(lines):
        if index > 0 and REGION_SEPARATOR.match(line):
            http_file.regions.append(_parse_region(lines, start, index - 1))
            start = index

    http_file.regions.append(_parse_region(lines, start, len(lines) - 1))
    return http_file


def parse_request_line(line: str) -> HttpRequest | None:
    """
    Parse a request line into an HttpRequest.

    Returns None when the line is neither a known method followed by a
    target nor a bare URL.
    """
    match = REQUEST_LINE_PATTERN.match(line)
    if not match:
        return None

    method = (match.group("method") or "").upper()
    url = match.group("url")

    if method in HTTP_METHODS:
        return HttpRequest(method=method, url=url, variant=RequestVariant.HTTP)
    if method in PROTOCOL_METHODS:
        return HttpRequest(method=method, url=url, variant=PROTOCOL_METHODS[method])
    if method or not URL_PATTERN.match(url):
        return None

    scheme = url.split("://", 1)[0].lower() if "://" in url else ""
    variant = URL_SCHEMES.get(scheme, RequestVariant.HTTP)
    return HttpRequest(method="GET", url=url, variant=variant)


def _parse_region(lines: list[str], start: int, end: int) -> HttpRegion:
    symbol = HttpSymbol(
        name=lines[start].strip() or "region",
        kind=SymbolKind.OTHER,
        start_line=start,
        end_line=end,
    )
    region = HttpRegion(symbol=symbol)

    state = "meta"
    request_symbol: HttpSymbol | None = None
    body_start: int | None = None
    body_end: int | None = None

    for index in range(start, end + 1):
        line = lines[index]
        stripped = line.strip()

        if state == "meta":
            if not stripped or REGION_SEPARATOR.match(line):
                continue
            if COMMENT_PATTERN.match(line):
                meta = META_DATA_PATTERN.match(line)
                if meta:
                    region.meta_data[meta.group("key")] = meta.group("value")
                    symbol.children.append(
                        HttpSymbol(meta.group("key"), SymbolKind.META_DATA, index, index)
                    )
                continue
            request = parse_request_line(line)
            if request is None:
                symbol.children.append(HttpSymbol(stripped, SymbolKind.OTHER, index, index))
                continue
            region.request = request
            request_symbol = HttpSymbol(stripped, SymbolKind.REQUEST_LINE, index, index)
            symbol.children.append(request_symbol)
            state = "headers"

        elif state == "headers":
            if not stripped:
                state = "body"
                continue
            if COMMENT_PATTERN.match(line):
                continue
            if request_symbol is not None and QUERY_CONTINUATION.match(line):
                request_symbol.end_line = index
                continue
            header = HEADER_PATTERN.match(line)
            if header and region.request is not None:
                region.request.headers[header.group("name")] = header.group("value")
                symbol.children.append(
                    HttpSymbol(header.group("name"), SymbolKind.REQUEST_HEADER, index, index)
                )
                continue
            state = "body"
            body_start = body_end = index

        else:
            if not stripped:
                continue
            if body_start is None:
                body_start = index
            body_end = index

    if body_start is not None and body_end is not None:
        symbol.children.append(
            HttpSymbol("body", SymbolKind.REQUEST_BODY, body_start, body_end)
        )

    return region

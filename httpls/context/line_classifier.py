from httpls.context.types import LineContext, LineContextKind
from httpls.document.model import HttpFile, HttpRegion, SymbolKind


# Symbol kinds after which the cursor line is a header line
HEADER_PRECEDING_KINDS = frozenset([SymbolKind.REQUEST_LINE, SymbolKind.REQUEST_HEADER])


class LineClassifier:
    """
    Classifies the cursor line into completion contexts.

    Several contexts can hold at once. REQUEST_LINE always holds so that
    method keywords are offered on any empty or method-prefixed line.
    """

    def classify(
        self,
        line_text: str,
        cursor_line: int,
        http_file: HttpFile | None = None,
    ) -> list[LineContext]:
        """
        Classify the text before the cursor.

        Args:
            line_text: Text of the cursor line up to the cursor
            cursor_line: 0-indexed line of the cursor
            http_file: Parsed document model, None when unavailable

        Returns:
            Contexts in the order their candidates are emitted
        """
        text = line_text.strip()
        contexts = [LineContext.request_line()]

        header = self._header_context(cursor_line, http_file)
        if header is not None:
            contexts.append(header)

        if text.startswith("#"):
            if header is None:
                contexts.append(LineContext.meta_comment_line(text[1:].strip()))
            if http_file is not None and "ref" in text.lower():
                contexts.append(LineContext.reference_comment_line())

        return contexts

    def _header_context(
        self, cursor_line: int, http_file: HttpFile | None
    ) -> LineContext | None:
        if http_file is None:
            return None

        region = http_file.find_region(cursor_line)
        if region is None or not is_after_request_line(region, cursor_line):
            return None

        if region.request is None or region.request.variant is None:
            return None

        return LineContext.header_line(region.request.variant)


def is_after_request_line(region: HttpRegion, line: int) -> bool:
    """Check if the line right above is the request line or a header."""
    for child in region.symbol.children:
        if child.start_line == line - 1:
            return child.kind in HEADER_PRECEDING_KINDS
    return False


def is_content_type_line(line_text: str) -> bool:
    return "content-type" in line_text.lower()


def is_authorization_line(line_text: str) -> bool:
    return "authorization" in line_text.lower()


def find_context(
    contexts: list[LineContext], kind: LineContextKind
) -> LineContext | None:
    """Return the first context of the given kind."""
    for context in contexts:
        if context.kind == kind:
            return context
    return None

"""
Completion engine for .http documents.

Runs on every completion request:

1. Await the parsed document model (the only suspending step)
2. Classify the cursor line into contexts (LineClassifier)
3. Look up the table of every context and filter it by the typed prefix
4. Concatenate: methods, headers, mime types, auth schemes,
   meta-directives, region references

The engine never raises. Failures come back as a CompletionOutcome with
an error kind that the host reports however it sees fit.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from httpls.completion.candidate import CompletionCandidate, MetaDirective
from httpls.completion.meta_directives import meta_directive_table
from httpls.completion.prefix_filter import (
    expand_meta_directives,
    filter_candidates,
    header_value_prefix,
    reference_prefix,
)
from httpls.completion.references import resolve_references
from httpls.completion.tables import (
    auth_scheme_table,
    header_table,
    method_table,
    mime_type_table,
)
from httpls.context.line_classifier import (
    LineClassifier,
    find_context,
    is_authorization_line,
    is_content_type_line,
)
from httpls.context.types import LineContextKind
from httpls.document.model import HttpFile


class HttpFileProvider(Protocol):
    async def get_http_file(self, uri: str) -> HttpFile | None: ...


class CompletionErrorKind(Enum):
    MODEL_UNAVAILABLE = "model_unavailable"   # degraded to request-line completion
    CANCELLED = "cancelled"                   # superseded before the model was ready
    INTERNAL = "internal"                     # no candidates computed


@dataclass(frozen=True)
class CompletionRequest:
    """Cursor position and the text typed before it on the cursor line."""

    uri: str
    line: int
    line_text: str


@dataclass
class CompletionOutcome:
    candidates: list[CompletionCandidate] = field(default_factory=list)
    error: CompletionErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class CompletionEngine:
    """
    Computes completion candidates for a cursor position.

    Usage:
        engine = CompletionEngine(document_store)
        outcome = await engine.complete(
            CompletionRequest(uri=uri, line=3, line_text="Content-Type: app")
        )
    """

    def __init__(
        self,
        document_store: HttpFileProvider | None = None,
        classifier: LineClassifier | None = None,
        directives: Callable[[], tuple[MetaDirective, ...]] = meta_directive_table,
    ) -> None:
        self.document_store = document_store
        self.classifier = classifier or LineClassifier()
        self.directives = directives

    async def complete(
        self,
        request: CompletionRequest,
        is_cancelled: Callable[[], bool] | None = None,
    ) -> CompletionOutcome:
        """
        Provide candidates for the request.

        Args:
            request: Cursor line, its text before the cursor and the document
            is_cancelled: Checked once the document model is available. When
                it returns True the request is dropped without candidates.
        """
        http_file: HttpFile | None = None
        error: CompletionErrorKind | None = None
        detail = ""

        if self.document_store is not None:
            try:
                http_file = await self.document_store.get_http_file(request.uri)
            except Exception as e:
                error = CompletionErrorKind.MODEL_UNAVAILABLE
                detail = f"Document model unavailable for {request.uri}: {type(e).__name__}: {e}"

        if is_cancelled is not None and is_cancelled():
            return CompletionOutcome(error=CompletionErrorKind.CANCELLED)

        try:
            candidates = self.collect(request.line_text, request.line, http_file)
        except Exception as e:
            return CompletionOutcome(
                error=CompletionErrorKind.INTERNAL,
                detail=f"Completion failed for {request.uri}: {type(e).__name__}: {e}",
            )

        return CompletionOutcome(candidates=candidates, error=error, detail=detail)

    def collect(
        self, line_text: str, line: int, http_file: HttpFile | None
    ) -> list[CompletionCandidate]:
        """Classify the line and gather the matching candidates in order."""
        text = line_text.strip()
        contexts = self.classifier.classify(line_text, line, http_file)
        result = []

        if find_context(contexts, LineContextKind.REQUEST_LINE):
            result.extend(filter_candidates(method_table(), text))

        header = find_context(contexts, LineContextKind.HEADER_LINE)
        if header:
            result.extend(filter_candidates(header_table(header.variant), text))
            if is_content_type_line(text):
                result.extend(filter_candidates(mime_type_table(), header_value_prefix(text)))
            if is_authorization_line(text):
                result.extend(filter_candidates(auth_scheme_table(), header_value_prefix(text)))

        meta = find_context(contexts, LineContextKind.META_COMMENT_LINE)
        if meta:
            result.extend(expand_meta_directives(self.directives(), meta.prefix))

        reference = find_context(contexts, LineContextKind.REFERENCE_COMMENT_LINE)
        if reference:
            result.extend(
                filter_candidates(
                    resolve_references(reference, http_file), reference_prefix(text)
                )
            )

        return result

from dataclasses import dataclass
from enum import Enum


class RequestVariant(Enum):
    """Protocol family of a single request in a .http document."""

    HTTP = "http"
    MQTT = "mqtt"
    EVENT_SOURCE = "event_source"   # SSE requests
    GRPC = "grpc"


class LineContextKind(Enum):
    """What kind of token the cursor line is completing."""

    REQUEST_LINE = "request_line"
    HEADER_LINE = "header_line"
    META_COMMENT_LINE = "meta_comment_line"
    REFERENCE_COMMENT_LINE = "reference_comment_line"
    NONE = "none"


@dataclass(frozen=True)
class LineContext:
    """
    A single classification of the cursor line.

    Only HEADER_LINE carries a variant and only META_COMMENT_LINE carries
    a prefix (the text typed after the leading '#').
    """

    kind: LineContextKind
    variant: RequestVariant | None = None
    prefix: str = ""

    @classmethod
    def request_line(cls) -> "LineContext":
        return cls(LineContextKind.REQUEST_LINE)

    @classmethod
    def header_line(cls, variant: RequestVariant) -> "LineContext":
        return cls(LineContextKind.HEADER_LINE, variant=variant)

    @classmethod
    def meta_comment_line(cls, prefix: str) -> "LineContext":
        return cls(LineContextKind.META_COMMENT_LINE, prefix=prefix)

    @classmethod
    def reference_comment_line(cls) -> "LineContext":
        return cls(LineContextKind.REFERENCE_COMMENT_LINE)

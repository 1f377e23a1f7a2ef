from dataclasses import dataclass
from enum import Enum


class CandidateKind(Enum):
    """Presentation group of a candidate in the editor."""

    KEYWORD = "keyword"
    FIELD = "field"
    VALUE = "value"
    REFERENCE = "reference"


@dataclass(frozen=True)
class CompletionCandidate:
    """
    A single completion suggestion.

    insert_text defaults to name. It only differs for meta-directives,
    where it is the part of the directive not typed yet.
    """

    name: str
    description: str
    kind: CandidateKind
    insert_text: str | None = None

    def __post_init__(self) -> None:
        if self.insert_text is None:
            object.__setattr__(self, "insert_text", self.name)


@dataclass(frozen=True)
class MetaDirective:
    """A '# @name' directive known to the document grammar."""

    name: str
    description: str
    completions: tuple[str, ...] | None = None

import re
from collections.abc import Iterable, Sequence

from httpls.completion.candidate import (
    CandidateKind,
    CompletionCandidate,
    MetaDirective,
)


# The first token of the comment must be a ref directive (ref, forceRef, responseRef)
REFERENCE_TARGET_PATTERN = re.compile(
    r"^\s*#+\s*@?\w*ref\s+(?P<target>.*)$", re.IGNORECASE
)


def filter_candidates(
    candidates: Sequence[CompletionCandidate], typed_prefix: str
) -> list[CompletionCandidate]:
    """
    Keep the candidates whose name starts with the typed prefix.

    Matching is case-insensitive and anchored at the start of the name.
    An empty prefix keeps every candidate in table order.
    """
    if not typed_prefix:
        return list(candidates)

    prefix = typed_prefix.lower()
    return [c for c in candidates if c.name.lower().startswith(prefix)]


def expand_meta_directives(
    directives: Iterable[MetaDirective], typed_prefix: str
) -> list[CompletionCandidate]:
    """
    Build '@directive' candidates for the text typed after '#'.

    A directive with sub-completions yields one '@directive completion'
    candidate per sub-completion. Directive names are matched
    case-sensitively against the typed text without its leading '@', and
    insert_text holds only the characters that are not typed yet, so
    accepting a suggestion never duplicates the typed prefix.

    Example:
        typed '@ve' -> name '@verbose true', insert_text 'rbose true'
    """
    typed_name = typed_prefix[1:] if typed_prefix.startswith("@") else typed_prefix
    # The '@' counts as typed once any part of the name is
    consumed = len(typed_name) + 1 if typed_name else len(typed_prefix)

    result = []
    for directive in directives:
        names = [f"@{directive.name}"]
        if directive.completions:
            names = [f"@{directive.name} {completion}" for completion in directive.completions]

        for name in names:
            if not name[1:].startswith(typed_name):
                continue
            result.append(
                CompletionCandidate(
                    name=name,
                    description=directive.description,
                    kind=CandidateKind.FIELD,
                    insert_text=name[consumed:],
                )
            )

    return result


def header_value_prefix(line_text: str) -> str:
    """Text typed after the ':' of a header line."""
    _, separator, value = line_text.strip().partition(":")
    if not separator:
        return ""
    return value.strip()


def reference_prefix(comment_text: str) -> str:
    """Region name typed after the 'ref' keyword of a comment line."""
    match = REFERENCE_TARGET_PATTERN.search(comment_text)
    if not match:
        return ""
    return match.group("target").strip()

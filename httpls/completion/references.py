from httpls.completion.candidate import CandidateKind, CompletionCandidate
from httpls.context.types import LineContext, LineContextKind
from httpls.document.model import HttpFile


REGION_NAME_DESCRIPTION = "httpRegion name"


def resolve_references(
    context: LineContext, http_file: HttpFile | None
) -> list[CompletionCandidate]:
    """
    Offer the names of the document's named regions.

    Regions sharing a name each produce a candidate; duplicates are kept.
    """
    if context.kind != LineContextKind.REFERENCE_COMMENT_LINE or http_file is None:
        return []

    return [
        CompletionCandidate(
            name=region.name,
            description=REGION_NAME_DESCRIPTION,
            kind=CandidateKind.REFERENCE,
        )
        for region in http_file.named_regions()
    ]

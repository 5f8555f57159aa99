"""Reference number classification.

Aha! records are addressed by reference numbers whose shape tells the record kind:
- Feature:     ACTIVATION-59  (prefix, number)
- Requirement: ADT-123-1      (feature reference, requirement number)
- Page/Note:   ABC-N-213      (prefix, literal N, number)

The three patterns are disjoint: a requirement has one more numeric segment than a
feature, and a page has the literal N where the feature number would be.
"""
import enum
import logging
import re
from typing import Iterable, Optional

from pydantic import BaseModel

from .errors import InvalidArgumentError

logger = logging.getLogger("aha-mcp.references")


class RecordKind(str, enum.Enum):
    """Record kinds addressable by reference number."""
    FEATURE = "feature"
    REQUIREMENT = "requirement"
    PAGE = "page"


# re.ASCII keeps \d to 0-9; fullmatch() is used so a trailing newline never matches
FEATURE_REF_REGEX = re.compile(r"^([A-Z][A-Z0-9]*)-(\d+)$", re.ASCII)
REQUIREMENT_REF_REGEX = re.compile(r"^([A-Z][A-Z0-9]*)-(\d+)-(\d+)$", re.ASCII)
NOTE_REF_REGEX = re.compile(r"^([A-Z][A-Z0-9]*)-N-(\d+)$", re.ASCII)

REFERENCE_PATTERNS: dict[RecordKind, re.Pattern] = {
    RecordKind.FEATURE: FEATURE_REF_REGEX,
    RecordKind.REQUIREMENT: REQUIREMENT_REF_REGEX,
    RecordKind.PAGE: NOTE_REF_REGEX,
}

# Example formats used in validation messages
REFERENCE_EXAMPLES: dict[RecordKind, str] = {
    RecordKind.FEATURE: "DEVELOP-123",
    RecordKind.REQUIREMENT: "ADT-123-1",
    RecordKind.PAGE: "ABC-N-213",
}


class ParsedReference(BaseModel):
    """A classified reference with its captured segments."""

    reference: str
    kind: RecordKind
    prefix: str
    number: int
    # Requirement number for ADT-123-1 style references
    sub_number: Optional[int] = None


def matching_kinds(reference: str) -> list[RecordKind]:
    """Return every kind whose pattern matches the reference."""
    return [
        kind for kind, pattern in REFERENCE_PATTERNS.items()
        if pattern.fullmatch(reference or "")
    ]


def parse_reference(reference: str) -> ParsedReference:
    """Classify a reference and capture its segments.

    Raises:
        InvalidArgumentError: If the reference matches none of the known formats
    """
    for kind, pattern in REFERENCE_PATTERNS.items():
        match = pattern.fullmatch(reference or "")
        if not match:
            continue
        groups = match.groups()
        return ParsedReference(
            reference=reference,
            kind=kind,
            prefix=groups[0],
            number=int(groups[1]),
            sub_number=int(groups[2]) if kind == RecordKind.REQUIREMENT else None,
        )

    raise InvalidArgumentError(
        f"Invalid reference number format: {reference!r}. "
        f"Expected {format_examples(REFERENCE_PATTERNS)}"
    )


def classify(reference: str) -> RecordKind:
    """Return the record kind a reference addresses."""
    return parse_reference(reference).kind


def format_examples(kinds: Iterable[RecordKind]) -> str:
    """Join example references for the given kinds, e.g. 'DEVELOP-123 or ADT-123-1'."""
    return " or ".join(REFERENCE_EXAMPLES[kind] for kind in kinds)


def require_kind(reference: str, allowed: Iterable[RecordKind]) -> RecordKind:
    """Classify a reference and reject kinds the calling tool cannot serve.

    Unrecognized and wrong-kind references get the same message so the caller
    always sees the format the tool expects.
    """
    allowed = list(allowed)
    message = f"Invalid reference number format. Expected {format_examples(allowed)}"

    try:
        kind = classify(reference)
    except InvalidArgumentError:
        raise InvalidArgumentError(message) from None

    if kind not in allowed:
        logger.info(f"Rejected {kind.value} reference {reference} (expected {format_examples(allowed)})")
        raise InvalidArgumentError(message)
    return kind

"""Regular expressions used by free-text PII detection, in scan order."""

import re
from collections.abc import Iterator

from ..core.types import PIIType

# re.ASCII keeps \b and \s to ASCII semantics so non-Latin letters never
# form word boundaries around digits.
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", re.ASCII)

# An email can only start where a local-part run starts or where the previous
# match ended. A match attempt anywhere inside a run ends the same way as one
# from the run's start, so other offsets are never tried.
_EMAIL_AT_RUN_START = re.compile(r"(?<![a-zA-Z0-9._%+-])" + EMAIL_PATTERN.pattern, re.ASCII)

# US numbers with optional +1 country code and optional area-code parentheses
PHONE_PATTERN = re.compile(
    r"(\+1[-.\s]?)?\(?[2-9][0-9]{2}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}", re.ASCII
)

SSN_PATTERN = re.compile(r"\b[0-9]{3}[-.\s]?[0-9]{2}[-.\s]?[0-9]{4}\b", re.ASCII)

CREDIT_CARD_PATTERN = re.compile(r"\b(?:[0-9]{4}[-.\s]?){3}[0-9]{4}\b", re.ASCII)

IPV4_PATTERN = re.compile(r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b", re.ASCII)

DETECTION_PATTERNS: tuple[tuple[PIIType, "re.Pattern[str]"], ...] = (
    (PIIType.EMAIL, EMAIL_PATTERN),
    (PIIType.PHONE, PHONE_PATTERN),
    (PIIType.SSN, SSN_PATTERN),
    (PIIType.CREDIT_CARD, CREDIT_CARD_PATTERN),
    (PIIType.IP, IPV4_PATTERN),
)

# Lower value wins when two overlapping spans have the same start and length
SCAN_PRIORITY: dict[PIIType, int] = {
    pii_type: rank for rank, (pii_type, _) in enumerate(DETECTION_PATTERNS)
}


def find_emails(text: str) -> Iterator["re.Match[str]"]:
    """Same matches as ``EMAIL_PATTERN.finditer(text)`` in linear time."""
    if "@" not in text:
        return
    pos = 0
    while True:
        match = EMAIL_PATTERN.match(text, pos) or _EMAIL_AT_RUN_START.search(text, pos)
        if match is None:
            return
        yield match
        pos = match.end()

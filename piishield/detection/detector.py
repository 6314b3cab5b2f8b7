"""Heuristic PII detection and redaction for free text.

Detection is pattern based and neither exhaustive nor precise: it can miss
PII and it can report the same span under several types. Callers must not
treat an empty result as proof that a text is clean.
"""

import logging
import re
from collections import Counter
from collections.abc import Iterable, Iterator

from ..core.exceptions import DetectionError
from ..core.types import PIIFinding, PIIType
from .patterns import DETECTION_PATTERNS, SCAN_PRIORITY, find_emails

logger = logging.getLogger(__name__)


def _ensure_text(text: object) -> str:
    if not isinstance(text, str):
        raise DetectionError(
            f"Detection requires str input, got {type(text).__name__}"
        )
    return text


def _iter_matches(
    pii_type: PIIType, pattern: "re.Pattern[str]", text: str
) -> Iterator["re.Match[str]"]:
    if pii_type is PIIType.EMAIL:
        return find_emails(text)
    return pattern.finditer(text)


def detect_pii(text: str) -> list[PIIFinding]:
    """Every pattern match in ``text``.

    Patterns run independently in the order email, phone, ssn, credit_card,
    ip; findings come back in that order and, within a type, by offset.
    Overlapping matches of different types are all reported.

    Raises:
        DetectionError: If ``text`` is not a string
    """
    text = _ensure_text(text)
    findings: list[PIIFinding] = []

    for pii_type, pattern in DETECTION_PATTERNS:
        for match in _iter_matches(pii_type, pattern, text):
            findings.append(PIIFinding(pii_type, match.group(0), match.start()))

    if findings:
        logger.debug(f"Detected {len(findings)} PII candidate(s)")
    return findings


def select_redaction_spans(findings: Iterable[PIIFinding]) -> list[PIIFinding]:
    """Non-overlapping spans to replace, by ascending offset.

    Overlapping findings merge into one span covering all of them, so no
    matched character survives redaction. The merged span keeps the type of
    the finding that comes first by earliest start, then longest match, then
    scan order.
    """
    ordered = sorted(
        findings, key=lambda f: (f.index, -len(f.match), SCAN_PRIORITY[f.type])
    )
    selected: list[PIIFinding] = []

    for finding in ordered:
        if selected and finding.overlaps(selected[-1]):
            last = selected[-1]
            if finding.end > last.end:
                tail = finding.match[last.end - finding.index :]
                selected[-1] = PIIFinding(last.type, last.match + tail, last.index)
            continue
        selected.append(finding)

    return selected


def redact_pii(text: str) -> str:
    """Replace detected PII with ``[REDACTED_<TYPE>]`` placeholders.

    Splices run from the end of the string backward so earlier offsets stay
    valid while replacements change the length of the text.
    """
    text = _ensure_text(text)
    spans = select_redaction_spans(detect_pii(text))

    redacted = text
    for finding in reversed(spans):
        redacted = (
            redacted[: finding.index]
            + finding.type.placeholder
            + redacted[finding.end :]
        )

    if spans:
        logger.debug(f"Redacted {len(spans)} span(s)")
    return redacted


def summarize_findings(findings: Iterable[PIIFinding]) -> dict[str, int]:
    """Count findings per type value, e.g. ``{"email": 2, "phone": 1}``."""
    counts = Counter(finding.type.value for finding in findings)
    return dict(counts)


def contains_pii(text: str) -> bool:
    """True if any pattern matches ``text``."""
    text = _ensure_text(text)
    return any(
        next(_iter_matches(pii_type, pattern, text), None) is not None
        for pii_type, pattern in DETECTION_PATTERNS
    )

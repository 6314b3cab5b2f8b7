"""Free-text PII detection and redaction."""

from .detector import (
    contains_pii,
    detect_pii,
    redact_pii,
    select_redaction_spans,
    summarize_findings,
)
from .patterns import DETECTION_PATTERNS, SCAN_PRIORITY

__all__ = [
    "detect_pii",
    "redact_pii",
    "select_redaction_spans",
    "summarize_findings",
    "contains_pii",
    "DETECTION_PATTERNS",
    "SCAN_PRIORITY",
]

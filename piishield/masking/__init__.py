"""Value masking for display."""

from .engine import RULE_FUNCTIONS, MaskingEngine, mask_pii, resolve_rule
from .rules import (
    mask_address,
    mask_credit_card,
    mask_email,
    mask_full,
    mask_ip,
    mask_name,
    mask_partial,
    mask_phone,
    mask_ssn,
)

__all__ = [
    "MaskingEngine",
    "RULE_FUNCTIONS",
    "mask_pii",
    "resolve_rule",
    "mask_full",
    "mask_partial",
    "mask_email",
    "mask_phone",
    "mask_ssn",
    "mask_credit_card",
    "mask_address",
    "mask_name",
    "mask_ip",
]

"""Rule dispatch for value masking."""

import logging
from typing import Callable, Optional, Union

from ..core.exceptions import MaskingError
from ..core.types import DEFAULT_MASKING_OPTIONS, MaskingOptions, MaskingRule
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

logger = logging.getLogger(__name__)

MaskFunction = Callable[[str, Optional[MaskingOptions]], str]

RULE_FUNCTIONS: dict[MaskingRule, MaskFunction] = {
    MaskingRule.FULL: mask_full,
    MaskingRule.PARTIAL: mask_partial,
    MaskingRule.EMAIL: mask_email,
    MaskingRule.PHONE: mask_phone,
    MaskingRule.SSN: mask_ssn,
    MaskingRule.CREDIT_CARD: mask_credit_card,
    MaskingRule.ADDRESS: mask_address,
    MaskingRule.NAME: mask_name,
    MaskingRule.IP: mask_ip,
}


def resolve_rule(rule: Union[MaskingRule, str, None]) -> Optional[MaskingRule]:
    """Map a rule name to a MaskingRule, or None when it is unknown."""
    if isinstance(rule, MaskingRule):
        return rule
    try:
        return MaskingRule(rule)
    except ValueError:
        return None


class MaskingEngine:
    """Applies masking rules to individual values.

    Guarantees that a non-empty value is never returned unchanged: when a rule
    would echo its input, the value is fully masked instead.

    Examples:
        >>> engine = MaskingEngine()
        >>> engine.mask("123-45-6789", MaskingRule.SSN)
        '***-**-6789'
        >>> engine.mask("4111111111111111", "credit_card")
        '****-****-****-1111'
    """

    def __init__(self, default_options: Optional[MaskingOptions] = None):
        self.default_options = default_options or DEFAULT_MASKING_OPTIONS

    def mask(
        self,
        value: str,
        rule: Union[MaskingRule, str],
        options: Optional[MaskingOptions] = None,
    ) -> str:
        """Mask ``value`` with ``rule``.

        Unknown rules fall back to partial masking with the engine's default
        options, ignoring ``options``.

        Raises:
            MaskingError: If ``value`` is not a string
        """
        if not isinstance(value, str):
            raise MaskingError(
                f"Masking requires str input, got {type(value).__name__}",
                rule=str(getattr(rule, "value", rule)),
            )
        if not value:
            return ""

        opts = options or self.default_options
        resolved = resolve_rule(rule)
        if resolved is None:
            logger.warning(f"Unknown masking rule {rule!r}, falling back to partial")
            masked = mask_partial(value, self.default_options)
        else:
            logger.debug(f"Masking value of length {len(value)} with rule {resolved.value}")
            masked = RULE_FUNCTIONS[resolved](value, opts)

        if masked == value:
            logger.debug(
                f"Masking rule {rule!r} left value unchanged, applying full mask"
            )
            masked = mask_full(value, opts)

        return masked


_default_engine = MaskingEngine()


def mask_pii(
    value: str,
    rule: Union[MaskingRule, str],
    options: Optional[MaskingOptions] = None,
) -> str:
    """Mask ``value`` according to ``rule`` using default options."""
    return _default_engine.mask(value, rule, options)

"""Type-specific masking functions.

Each function is pure and never raises for malformed values: input that does
not have the expected shape falls back to full masking or to a fixed
heuristic mask.
"""

import re
from typing import Optional

from ..core.types import DEFAULT_MASKING_OPTIONS, MaskingOptions

_NON_DIGIT = re.compile(r"[^0-9]")
_WHITESPACE = re.compile(r"\s+")

# Text after the last comma: "ST" optionally followed by a ZIP / ZIP+4.
_STATE_ZIP = re.compile(r"\s*([A-Za-z]{2})(?:\s+\d{5}(?:-\d{4})?)?\s*")

ADDRESS_FALLBACK_WIDTH = 20
IPV6_MASKED_GROUPS = 6


def _digits(value: str) -> str:
    return _NON_DIGIT.sub("", value)


def _options(options: Optional[MaskingOptions]) -> MaskingOptions:
    return options if options is not None else DEFAULT_MASKING_OPTIONS


def mask_full(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Replace every character; output length equals input length."""
    return _options(options).mask_char * len(value)


def mask_partial(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Keep ``show_first`` leading and ``show_last`` trailing characters.

    Values too short to reveal both boundaries are masked entirely.
    """
    opts = _options(options)
    if len(value) <= opts.show_first + opts.show_last:
        return mask_full(value, opts)

    first = value[: opts.show_first]
    last = value[len(value) - opts.show_last :]
    middle = opts.mask_char * (len(value) - opts.show_first - opts.show_last)
    return f"{first}{middle}{last}"


def mask_email(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Mask the local part after its first character and the leftmost domain label."""
    mask = _options(options).mask_char
    parts = value.split("@")
    if len(parts) != 2:
        return mask_full(value, options)

    local, domain = parts
    masked_local = local[0] + mask * (len(local) - 1) if len(local) > 1 else mask

    labels = domain.split(".")
    if len(labels) >= 2:
        masked_domain = mask * len(labels[0]) + "." + ".".join(labels[1:])
    else:
        masked_domain = mask * len(domain)

    return f"{masked_local}@{masked_domain}"


def mask_phone(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Reveal only the last four digits.

    With ``preserve_format`` every non-digit character stays in place.
    """
    opts = _options(options)
    digits = _digits(value)

    if len(digits) < 4:
        return mask_full(value, opts)

    if not opts.preserve_format:
        return opts.mask_char * (len(digits) - 4) + digits[-4:]

    reveal_from = len(digits) - 4
    masked = []
    digit_index = 0
    for char in value:
        if "0" <= char <= "9":
            masked.append(char if digit_index >= reveal_from else opts.mask_char)
            digit_index += 1
        else:
            masked.append(char)
    return "".join(masked)


def mask_ssn(value: str, options: Optional[MaskingOptions] = None) -> str:
    """``***-**-1234`` for nine-digit values, full mask otherwise."""
    digits = _digits(value)
    if len(digits) != 9:
        return mask_full(value, options)

    mask = _options(options).mask_char
    return f"{mask * 3}-{mask * 2}-{digits[-4:]}"


def mask_credit_card(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Reveal the last four digits; 16-digit numbers keep their grouping."""
    mask = _options(options).mask_char
    digits = _digits(value)
    if len(digits) < 4:
        return mask_full(value, options)

    last4 = digits[-4:]
    if len(digits) == 16:
        group = mask * 4
        return f"{group}-{group}-{group}-{last4}"

    return mask * (len(digits) - 4) + last4


def mask_address(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Keep only a trailing ``City, ST`` when one can be found.

    Best effort: the fallback hides a fixed-width prefix and appends an
    ellipsis without revealing any part of the input.
    """
    mask = _options(options).mask_char

    # Only the text after the last two commas is inspected
    head, comma, tail = value.rpartition(",")
    match = _STATE_ZIP.fullmatch(tail) if comma else None
    if match:
        city = head.rpartition(",")[2].strip()
        state = match.group(1).upper()
        if city:
            return f"{mask * 3}, {city}, {state}"

    return mask * min(len(value), ADDRESS_FALLBACK_WIDTH) + "..."


def mask_name(value: str, options: Optional[MaskingOptions] = None) -> str:
    """``J. S****`` for multi-token names; middle names are dropped."""
    mask = _options(options).mask_char
    parts = _WHITESPACE.split(value.strip())
    if not parts or not parts[0]:
        return mask_full(value, options)

    if len(parts) == 1:
        return parts[0][0] + mask * (len(parts[0]) - 1)

    last = parts[-1]
    return f"{parts[0][0]}. {last[0]}{mask * (len(last) - 1)}"


def mask_ip(value: str, options: Optional[MaskingOptions] = None) -> str:
    """Keep the first two IPv4 octets or the first two IPv6 groups."""
    mask = _options(options).mask_char

    if "." in value:
        octets = value.split(".")
        if len(octets) == 4:
            return f"{octets[0]}.{octets[1]}.{mask * 3}.{mask * 3}"

    if ":" in value:
        groups = value.split(":")
        if len(groups) >= 4:
            hidden = ":".join([mask * 4] * IPV6_MASKED_GROUPS)
            return f"{groups[0]}:{groups[1]}:{hidden}"

    return mask_full(value, options)

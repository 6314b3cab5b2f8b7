"""Record-level anonymization for export and deletion requests."""

import logging
import secrets
import string
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional

from ..core.hashing import hash_with_salt
from ..core.types import AnonymizationRecord, MaskingRule, PIIField
from ..masking import mask_pii
from .policies import DELETION_POLICY, REDACTED_MARKER, deletion_value

logger = logging.getLogger(__name__)

ANONYMOUS_ID_PREFIX = "ANON_"
ANONYMOUS_ID_LENGTH = 12

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


def generate_anonymous_id(user_id: str, salt: str = "") -> str:
    """Deterministic pseudonym for ``user_id``.

    ``ANON_`` followed by the first 12 hex characters of SHA-256 over
    ``user_id + salt``; stable across calls with the same inputs.
    """
    digest = hash_with_salt(user_id, salt)
    return f"{ANONYMOUS_ID_PREFIX}{digest[:ANONYMOUS_ID_LENGTH]}"


def anonymize_object(
    record: Mapping[str, Any],
    fields_to_anonymize: Iterable[str],
    replacements: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Shallow copy of ``record`` with the named fields replaced.

    Each named field present in the record becomes its entry in
    ``replacements`` or ``[REDACTED]``. Fields absent from the record are not
    added; unnamed fields are untouched.
    """
    anonymized = dict(record)
    replacements = replacements or {}

    for field_name in fields_to_anonymize:
        if field_name in anonymized:
            replacement = replacements.get(field_name)
            anonymized[field_name] = (
                replacement if replacement is not None else REDACTED_MARKER
            )

    return anonymized


def prepare_data_for_export(
    record: Mapping[str, Any],
    pii_fields: Iterable[PIIField],
    mask: Callable[[str, MaskingRule], str] = mask_pii,
) -> dict[str, Any]:
    """Copy of ``record`` for a data-portability request.

    Only highly sensitive fields with a masking rule are masked; the data
    subject sees everything else in clear. ``mask`` lets an engine apply its
    own masking options.
    """
    exported = dict(record)
    masked_count = 0

    for pii_field in pii_fields:
        key = pii_field.column_name
        if not exported.get(key):
            continue
        if pii_field.is_highly_sensitive and pii_field.masking_rule is not None:
            exported[key] = mask(str(exported[key]), pii_field.masking_rule)
            masked_count += 1

    logger.debug(f"Prepared record for export, masked {masked_count} field(s)")
    return exported


def prepare_data_for_deletion(
    record: Mapping[str, Any],
    user_id: str,
    pii_fields: Iterable[PIIField],
    salt: str = "",
) -> dict[str, Any]:
    """Copy of ``record`` anonymized for a right-to-be-forgotten request.

    The outcome depends only on each field's category:

    ============================================  =============================
    identifier                                    ``[DELETED_<anonymous id>]``
    financial, health, biometric, genetic         ``[DELETED]``
    location                                      ``[LOCATION_DELETED]``
    behavioral                                    ``None``
    ============================================  =============================
    """
    anonymized = dict(record)
    anonymous_id = generate_anonymous_id(user_id, salt)

    for pii_field in pii_fields:
        key = pii_field.column_name
        if key in anonymized:
            action = DELETION_POLICY[pii_field.category]
            anonymized[key] = deletion_value(action, anonymous_id)

    return anonymized


def build_anonymization_record(
    user_id: str,
    table_name: str,
    record_id: str,
    anonymized_fields: Iterable[str],
    salt: str = "",
) -> AnonymizationRecord:
    """Audit entry for an anonymized record, keyed by the pseudonym only."""
    return AnonymizationRecord(
        anonymized_user_id=generate_anonymous_id(user_id, salt),
        table_name=table_name,
        record_id=record_id,
        anonymized_fields=tuple(anonymized_fields),
    )


def generate_random_data(kind: str) -> str:
    """Random stand-in value for ``email``, ``phone``, ``name`` or ``address``."""
    random_id = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(8))

    if kind == "email":
        return f"anonymous_{random_id}@example.com"
    if kind == "phone":
        return f"555-000-{1000 + secrets.randbelow(9000)}"
    if kind == "name":
        return f"Anonymous User {random_id}"
    if kind == "address":
        return "123 Anonymous St, City, ST 00000"
    return REDACTED_MARKER

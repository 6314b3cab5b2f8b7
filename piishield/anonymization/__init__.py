"""Anonymization of structured records."""

from .anonymizer import (
    anonymize_object,
    build_anonymization_record,
    generate_anonymous_id,
    generate_random_data,
    prepare_data_for_deletion,
    prepare_data_for_export,
)
from .policies import (
    DELETED_MARKER,
    DELETION_POLICY,
    LOCATION_DELETED_MARKER,
    REDACTED_MARKER,
    DeletionAction,
)

__all__ = [
    "generate_anonymous_id",
    "anonymize_object",
    "prepare_data_for_export",
    "prepare_data_for_deletion",
    "build_anonymization_record",
    "generate_random_data",
    "DeletionAction",
    "DELETION_POLICY",
    "REDACTED_MARKER",
    "DELETED_MARKER",
    "LOCATION_DELETED_MARKER",
]

"""Value types shared by every PIIShield component."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional, Union

from .exceptions import CatalogError, create_validation_error


class PIICategory(Enum):
    """Kind of personal data a column holds; drives the deletion policy."""

    IDENTIFIER = "identifier"
    FINANCIAL = "financial"
    HEALTH = "health"
    BIOMETRIC = "biometric"
    GENETIC = "genetic"
    LOCATION = "location"
    BEHAVIORAL = "behavioral"


class SensitivityLevel(Enum):
    """How harmful disclosure of a column would be."""

    STANDARD = "standard"
    SENSITIVE = "sensitive"
    HIGHLY_SENSITIVE = "highly_sensitive"


class MaskingRule(Enum):
    """Selects the masking algorithm applied to a value."""

    FULL = "full"
    PARTIAL = "partial"
    EMAIL = "email"
    PHONE = "phone"
    SSN = "ssn"
    CREDIT_CARD = "credit_card"
    ADDRESS = "address"
    NAME = "name"
    IP = "ip"


class LegalBasis(Enum):
    """GDPR Art. 6 lawful basis recorded for a column."""

    CONSENT = "consent"
    CONTRACT = "contract"
    LEGAL_OBLIGATION = "legal_obligation"
    VITAL_INTERESTS = "vital_interests"
    PUBLIC_TASK = "public_task"
    LEGITIMATE_INTERESTS = "legitimate_interests"


class PIIType(Enum):
    """Types reported by free-text detection."""

    EMAIL = "email"
    PHONE = "phone"
    SSN = "ssn"
    CREDIT_CARD = "credit_card"
    IP = "ip"

    @property
    def placeholder(self) -> str:
        """Replacement marker used by redaction."""
        return f"[REDACTED_{self.value.upper()}]"


def _coerce_enum(enum_cls: Any, value: Any, field_name: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        valid = [member.value for member in enum_cls]
        raise CatalogError(
            f"Invalid {field_name} '{value}'. Valid values: {valid}",
            field_name=field_name,
        ) from e


@dataclass(frozen=True)
class PIIField:
    """Declares one sensitive column of the application schema.

    Authored by whoever owns the data inventory; the engine only reads it.
    String values are accepted for the enum attributes and coerced.

    Attributes:
        table_name: Table holding the column
        column_name: Column (record key) holding the value
        category: PII category, selects the deletion outcome
        sensitivity_level: Controls masking on export
        masking_rule: Rule applied when the value must be masked
        retention_days: Days the value may be kept, if limited
        encryption_required: Whether the column must be stored encrypted
        legal_basis: Lawful basis for processing
        processing_purpose: Free-text purpose description
    """

    table_name: str
    column_name: str
    category: PIICategory
    sensitivity_level: SensitivityLevel = SensitivityLevel.STANDARD
    masking_rule: Optional[MaskingRule] = None
    retention_days: Optional[int] = None
    encryption_required: bool = False
    legal_basis: Optional[LegalBasis] = None
    processing_purpose: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.table_name or not self.column_name:
            raise CatalogError(
                "PIIField requires both table_name and column_name",
                table_name=self.table_name or None,
                column_name=self.column_name or None,
            )

        object.__setattr__(
            self, "category", _coerce_enum(PIICategory, self.category, "category")
        )
        object.__setattr__(
            self,
            "sensitivity_level",
            _coerce_enum(SensitivityLevel, self.sensitivity_level, "sensitivity_level"),
        )
        if self.masking_rule is not None:
            object.__setattr__(
                self,
                "masking_rule",
                _coerce_enum(MaskingRule, self.masking_rule, "masking_rule"),
            )
        if self.legal_basis is not None:
            object.__setattr__(
                self,
                "legal_basis",
                _coerce_enum(LegalBasis, self.legal_basis, "legal_basis"),
            )

        if self.retention_days is not None and self.retention_days < 0:
            raise CatalogError(
                "retention_days must be a non-negative integer",
                table_name=self.table_name,
                column_name=self.column_name,
            )

    @property
    def key(self) -> tuple[str, str]:
        """Catalog key of this field."""
        return (self.table_name, self.column_name)

    @property
    def is_highly_sensitive(self) -> bool:
        return self.sensitivity_level is SensitivityLevel.HIGHLY_SENSITIVE

    def is_retention_expired(
        self, recorded_at: datetime, now: Optional[datetime] = None
    ) -> bool:
        """Whether a value recorded at ``recorded_at`` is past its retention.

        Fields without ``retention_days`` never expire. Naive datetimes are
        treated as UTC.
        """
        if self.retention_days is None:
            return False

        if now is None:
            now = datetime.now(timezone.utc)
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        return now - recorded_at > timedelta(days=self.retention_days)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary (enum values as strings)."""
        return {
            "table_name": self.table_name,
            "column_name": self.column_name,
            "category": self.category.value,
            "sensitivity_level": self.sensitivity_level.value,
            "masking_rule": self.masking_rule.value if self.masking_rule else None,
            "retention_days": self.retention_days,
            "encryption_required": self.encryption_required,
            "legal_basis": self.legal_basis.value if self.legal_basis else None,
            "processing_purpose": self.processing_purpose,
        }


@dataclass(frozen=True)
class MaskingOptions:
    """Tuning knobs for partial and phone masking.

    Attributes:
        show_first: Leading characters left visible by partial masking
        show_last: Trailing characters left visible by partial masking
        mask_char: Single replacement character
        preserve_format: Keep phone punctuation in place
    """

    show_first: int = 2
    show_last: int = 2
    mask_char: str = "*"
    preserve_format: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.mask_char, str) or len(self.mask_char) != 1:
            raise create_validation_error(
                "mask_char must be a single character string", "mask_char", "str"
            )
        for name in ("show_first", "show_last"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise create_validation_error(
                    f"{name} must be a non-negative integer", name, int
                )

    def with_options(self, **changes: Any) -> "MaskingOptions":
        """Create a new MaskingOptions with updated values."""
        merged = {
            "show_first": self.show_first,
            "show_last": self.show_last,
            "mask_char": self.mask_char,
            "preserve_format": self.preserve_format,
            **changes,
        }
        return MaskingOptions(**merged)


DEFAULT_MASKING_OPTIONS = MaskingOptions()


@dataclass(frozen=True)
class PIIFinding:
    """One match produced by free-text detection."""

    type: PIIType
    match: str
    index: int

    @property
    def end(self) -> int:
        return self.index + len(self.match)

    def overlaps(self, other: "PIIFinding") -> bool:
        return self.index < other.end and other.index < self.end

    def to_dict(self) -> dict[str, Union[str, int]]:
        return {"type": self.type.value, "match": self.match, "index": self.index}


@dataclass(frozen=True)
class AnonymizationRecord:
    """Audit entry written after a record was anonymized for deletion.

    Holds the pseudonymous id only, so audit trails stay linkable without
    retaining the real identifier.
    """

    anonymized_user_id: str
    table_name: str
    record_id: str
    anonymized_fields: tuple[str, ...] = ()
    anonymized_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "anonymized_user_id": self.anonymized_user_id,
            "table_name": self.table_name,
            "record_id": self.record_id,
            "anonymized_fields": list(self.anonymized_fields),
            "anonymized_at": self.anonymized_at.isoformat(),
        }

"""Catalog of sensitive columns, loadable from YAML."""

from pathlib import Path
from typing import Any, Iterator, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import CatalogError
from .types import LegalBasis, MaskingRule, PIICategory, PIIField, SensitivityLevel


def _validate_enum_value(enum_cls: Any, value: Any, label: str) -> Any:
    if value is None:
        return value
    try:
        enum_cls(value)
    except ValueError as e:
        valid = [member.value for member in enum_cls]
        raise ValueError(f"Invalid {label} '{value}'. Valid values: {valid}") from e
    return value


class FieldConfig(BaseModel):
    """Pydantic model for one catalog entry."""

    table_name: str = Field(..., min_length=1, description="Table name")
    column_name: str = Field(..., min_length=1, description="Column name")
    category: str = Field(..., description="PII category")
    sensitivity_level: str = Field("standard", description="Sensitivity level")
    masking_rule: Optional[str] = Field(None, description="Masking rule")
    retention_days: Optional[int] = Field(None, ge=0, description="Retention in days")
    encryption_required: bool = Field(False, description="Must be stored encrypted")
    legal_basis: Optional[str] = Field(None, description="Lawful basis")
    processing_purpose: Optional[str] = Field(None, description="Processing purpose")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Any) -> Any:
        return _validate_enum_value(PIICategory, v, "category")

    @field_validator("sensitivity_level")
    @classmethod
    def validate_sensitivity(cls, v: Any) -> Any:
        return _validate_enum_value(SensitivityLevel, v, "sensitivity level")

    @field_validator("masking_rule")
    @classmethod
    def validate_masking_rule(cls, v: Any) -> Any:
        return _validate_enum_value(MaskingRule, v, "masking rule")

    @field_validator("legal_basis")
    @classmethod
    def validate_legal_basis(cls, v: Any) -> Any:
        return _validate_enum_value(LegalBasis, v, "legal basis")


class CatalogFileSchema(BaseModel):
    """Pydantic model for catalog file schema validation."""

    version: str = Field("1.0", description="Catalog schema version")
    fields: list[FieldConfig] = Field(default_factory=list)


class PIICatalog:
    """Sensitive-column inventory keyed by ``(table_name, column_name)``."""

    def __init__(self, fields: Optional[list[PIIField]] = None):
        self._fields: dict[tuple[str, str], PIIField] = {}
        for pii_field in fields or []:
            self.add(pii_field)

    def add(self, pii_field: PIIField) -> None:
        """Register a field; a column may only be declared once."""
        if pii_field.key in self._fields:
            raise CatalogError(
                f"Duplicate catalog entry for {pii_field.table_name}.{pii_field.column_name}",
                table_name=pii_field.table_name,
                column_name=pii_field.column_name,
            )
        self._fields[pii_field.key] = pii_field

    def get(self, table_name: str, column_name: str) -> Optional[PIIField]:
        return self._fields.get((table_name, column_name))

    def fields_for_table(self, table_name: str) -> list[PIIField]:
        """All fields declared for ``table_name`` in declaration order."""
        return [f for f in self._fields.values() if f.table_name == table_name]

    @property
    def tables(self) -> list[str]:
        return sorted({f.table_name for f in self._fields.values()})

    def __iter__(self) -> Iterator[PIIField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def to_dict(self) -> dict[str, Any]:
        return {"version": "1.0", "fields": [f.to_dict() for f in self]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PIICatalog":
        """Build a catalog from a parsed document.

        Raises:
            CatalogError: If the document does not match the schema
        """
        try:
            schema = CatalogFileSchema(**(data or {}))
        except ValidationError as e:
            raise CatalogError(f"Invalid PII catalog: {e}") from e

        return cls([PIIField(**entry.model_dump()) for entry in schema.fields])

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PIICatalog":
        """Load a catalog from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise CatalogError(
                f"Catalog file not found: {path}", context={"path": str(path)}
            )

        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(
                f"Invalid YAML in catalog file: {e}", context={"path": str(path)}
            ) from e

        if data is not None and not isinstance(data, dict):
            raise CatalogError(
                "Catalog file must contain a mapping", context={"path": str(path)}
            )

        return cls.from_dict(data or {})


def default_catalog() -> PIICatalog:
    """Default inventory of the marketplace schema."""
    return PIICatalog(
        [
            PIIField(
                "profiles", "email", PIICategory.IDENTIFIER,
                masking_rule=MaskingRule.EMAIL,
                legal_basis=LegalBasis.CONTRACT,
                processing_purpose="Account authentication and communication",
            ),
            PIIField(
                "profiles", "full_name", PIICategory.IDENTIFIER,
                masking_rule=MaskingRule.PARTIAL,
                legal_basis=LegalBasis.CONTRACT,
                processing_purpose="User identification",
            ),
            PIIField(
                "profiles", "phone", PIICategory.IDENTIFIER,
                masking_rule=MaskingRule.PHONE,
                legal_basis=LegalBasis.CONSENT,
                processing_purpose="Optional contact method",
            ),
            PIIField(
                "profiles", "avatar_url", PIICategory.IDENTIFIER,
                legal_basis=LegalBasis.CONSENT,
                processing_purpose="Profile personalization",
            ),
            PIIField(
                "orders", "shipping_address", PIICategory.LOCATION,
                masking_rule=MaskingRule.PARTIAL,
                legal_basis=LegalBasis.CONTRACT,
                processing_purpose="Order fulfillment",
            ),
            PIIField(
                "orders", "billing_address", PIICategory.LOCATION,
                masking_rule=MaskingRule.PARTIAL,
                legal_basis=LegalBasis.LEGAL_OBLIGATION,
                processing_purpose="Payment processing",
            ),
            PIIField(
                "messages", "content", PIICategory.BEHAVIORAL,
                legal_basis=LegalBasis.CONTRACT,
                processing_purpose="Buyer-seller communication",
            ),
            PIIField(
                "w9_submissions", "legal_name", PIICategory.IDENTIFIER,
                sensitivity_level=SensitivityLevel.SENSITIVE,
                masking_rule=MaskingRule.PARTIAL,
                legal_basis=LegalBasis.LEGAL_OBLIGATION,
                processing_purpose="Tax compliance",
            ),
            PIIField(
                "w9_submissions", "tax_id", PIICategory.IDENTIFIER,
                sensitivity_level=SensitivityLevel.HIGHLY_SENSITIVE,
                masking_rule=MaskingRule.SSN,
                legal_basis=LegalBasis.LEGAL_OBLIGATION,
                processing_purpose="Tax reporting",
            ),
        ]
    )

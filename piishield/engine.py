"""PIIShieldEngine - one object bundling every PII protection operation."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from .anonymization import (
    anonymize_object,
    build_anonymization_record,
    generate_anonymous_id,
    prepare_data_for_deletion,
    prepare_data_for_export,
)
from .core.catalog import PIICatalog, default_catalog
from .core.config import EngineConfig, get_engine_config
from .core.exceptions import CatalogError
from .core.hashing import hash_pii, hash_with_salt
from .core.security import PIIEncryptor
from .core.types import (
    AnonymizationRecord,
    MaskingOptions,
    MaskingRule,
    PIIField,
    PIIFinding,
)
from .detection import contains_pii, detect_pii, redact_pii, summarize_findings
from .masking import MaskingEngine
from .observability import trace_operation
from .tokenization import Tokenizer, TokenStore

logger = logging.getLogger(__name__)


@dataclass
class DeletionResult:
    """Outcome of a right-to-be-forgotten pass over one record."""

    record: dict[str, Any]
    audit: AnonymizationRecord


class PIIShieldEngine:
    """High-level API over masking, encryption, hashing, tokenization,
    anonymization and detection.

    The token store is injected so that token mappings outlive the engine;
    nothing else in the engine holds state between calls.

    Examples:
        # Defaults: environment config, in-memory tokens, built-in catalog
        engine = PIIShieldEngine()
        engine.mask("jane@example.com", "email")
        token = engine.tokenize("123-45-6789")

        # Persistent tokens and a custom inventory
        engine = PIIShieldEngine(
            token_store=SQLiteTokenStore("sqlite:///tokens.db"),
            catalog=PIICatalog.from_yaml("pii_catalog.yaml"),
        )
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        token_store: Optional[TokenStore] = None,
        catalog: Optional[PIICatalog] = None,
    ):
        """Initialize the engine.

        Args:
            config: Engine settings (defaults to the environment configuration)
            token_store: Token mapping backend (defaults to in-memory)
            catalog: Sensitive-column inventory (defaults to the built-in one)
        """
        self.config = config or get_engine_config()
        self.catalog = catalog if catalog is not None else default_catalog()

        self._masking = MaskingEngine(MaskingOptions(mask_char=self.config.mask_char))
        self._encryptor = PIIEncryptor(self.config.security)
        self._tokenizer = Tokenizer(token_store, prefix=self.config.token_prefix)

        logger.debug(f"PIIShieldEngine initialized: {self.config.to_dict()}")

    @property
    def token_store(self) -> TokenStore:
        return self._tokenizer.store

    # Value-level operations

    def mask(
        self,
        value: str,
        rule: Union[MaskingRule, str],
        options: Optional[MaskingOptions] = None,
    ) -> str:
        return self._masking.mask(value, rule, options)

    def hash(self, value: str) -> str:
        return hash_pii(value)

    def hash_with_salt(self, value: str, salt: str) -> str:
        return hash_with_salt(value, salt)

    def encrypt(self, plaintext: str, key_material: str) -> str:
        return self._encryptor.encrypt(plaintext, key_material)

    def decrypt(self, envelope: str, key_material: str) -> str:
        return self._encryptor.decrypt(envelope, key_material)

    def tokenize(self, value: str) -> str:
        return self._tokenizer.tokenize(value)

    def detokenize(self, token: str) -> Optional[str]:
        return self._tokenizer.detokenize(token)

    def detect(self, text: str) -> list[PIIFinding]:
        return detect_pii(text)

    def redact(self, text: str) -> str:
        return redact_pii(text)

    def contains_pii(self, text: str) -> bool:
        return contains_pii(text)

    def anonymous_id(self, user_id: str) -> str:
        """Pseudonym for ``user_id`` under the configured salt."""
        return generate_anonymous_id(user_id, self.config.anonymous_id_salt)

    # Record-level operations

    def _fields_for(self, table_name: str) -> list[PIIField]:
        fields = self.catalog.fields_for_table(table_name)
        if not fields:
            raise CatalogError(
                f"No PII fields declared for table '{table_name}'",
                table_name=table_name,
            )
        return fields

    def mask_field(self, table_name: str, column_name: str, value: str) -> str:
        """Mask ``value`` with the rule declared for the column.

        Columns without a declared rule are fully masked.

        Raises:
            CatalogError: If the column is not in the catalog
        """
        pii_field = self.catalog.get(table_name, column_name)
        if pii_field is None:
            raise CatalogError(
                f"Column {table_name}.{column_name} is not in the PII catalog",
                table_name=table_name,
                column_name=column_name,
            )
        return self.mask(value, pii_field.masking_rule or MaskingRule.FULL)

    def anonymize(
        self,
        record: Mapping[str, Any],
        fields: Iterable[str],
        replacements: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        return anonymize_object(record, fields, replacements)

    def export_record(self, table_name: str, record: Mapping[str, Any]) -> dict[str, Any]:
        """Prepare a record of ``table_name`` for a data-portability request."""
        with trace_operation("export_record", table_name=table_name):
            return prepare_data_for_export(
                record, self._fields_for(table_name), mask=self._masking.mask
            )

    def delete_record(
        self,
        table_name: str,
        record: Mapping[str, Any],
        user_id: str,
        record_id: Optional[str] = None,
    ) -> DeletionResult:
        """Anonymize a record of ``table_name`` for a right-to-be-forgotten request.

        Returns the anonymized record with an audit entry that carries only the
        pseudonymous user id.
        """
        with trace_operation("delete_record", table_name=table_name) as attributes:
            fields = self._fields_for(table_name)
            salt = self.config.anonymous_id_salt

            anonymized = prepare_data_for_deletion(record, user_id, fields, salt=salt)
            touched = [f.column_name for f in fields if f.column_name in record]
            audit = build_anonymization_record(
                user_id,
                table_name,
                record_id if record_id is not None else str(record.get("id", "")),
                touched,
                salt=salt,
            )
            attributes["fields_anonymized"] = len(touched)

        return DeletionResult(record=anonymized, audit=audit)

    def scan_record(self, record: Mapping[str, Any]) -> dict[str, dict[str, int]]:
        """Per-key summary of PII detected in the string values of a record."""
        report: dict[str, dict[str, int]] = {}
        for key, value in record.items():
            if isinstance(value, str):
                summary = summarize_findings(detect_pii(value))
                if summary:
                    report[key] = summary
        return report

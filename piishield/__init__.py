"""PIIShield: masking, encryption, hashing, tokenization, anonymization and
detection of personally identifiable information.

Values and records go in, transformed values come out. The engine never
persists anything itself except through the token store a caller injects.
"""

__version__ = "0.1.0"

from .anonymization import (
    anonymize_object,
    build_anonymization_record,
    generate_anonymous_id,
    generate_random_data,
    prepare_data_for_deletion,
    prepare_data_for_export,
)
from .core import (
    AnonymizationRecord,
    CatalogError,
    ConfigurationError,
    DecryptionError,
    EncryptionError,
    EngineConfig,
    EnvelopeFormatError,
    MaskingOptions,
    MaskingRule,
    PIICatalog,
    PIICategory,
    PIIField,
    PIIFinding,
    PIIShieldError,
    PIIType,
    SecurityConfig,
    SensitivityLevel,
    TokenizationError,
    ValidationError,
    decrypt_pii,
    default_catalog,
    encrypt_pii,
    hash_pii,
    hash_with_salt,
)
from .detection import contains_pii, detect_pii, redact_pii, summarize_findings
from .engine import DeletionResult, PIIShieldEngine
from .masking import MaskingEngine, mask_pii
from .tokenization import InMemoryTokenStore, SQLiteTokenStore, Tokenizer, TokenStore

__all__ = [
    "__version__",
    # Engine
    "PIIShieldEngine",
    "DeletionResult",
    # Types
    "PIICategory",
    "SensitivityLevel",
    "MaskingRule",
    "PIIType",
    "PIIField",
    "MaskingOptions",
    "PIIFinding",
    "AnonymizationRecord",
    "PIICatalog",
    "default_catalog",
    "EngineConfig",
    "SecurityConfig",
    # Operations
    "mask_pii",
    "MaskingEngine",
    "hash_pii",
    "hash_with_salt",
    "encrypt_pii",
    "decrypt_pii",
    "Tokenizer",
    "TokenStore",
    "InMemoryTokenStore",
    "SQLiteTokenStore",
    "generate_anonymous_id",
    "anonymize_object",
    "prepare_data_for_export",
    "prepare_data_for_deletion",
    "build_anonymization_record",
    "generate_random_data",
    "detect_pii",
    "redact_pii",
    "summarize_findings",
    "contains_pii",
    # Exceptions
    "PIIShieldError",
    "ValidationError",
    "ConfigurationError",
    "CatalogError",
    "EncryptionError",
    "EnvelopeFormatError",
    "DecryptionError",
    "TokenizationError",
]

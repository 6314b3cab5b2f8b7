"""Core types, configuration, hashing and encryption for PIIShield."""

from .catalog import CatalogFileSchema, FieldConfig, PIICatalog, default_catalog
from .config import EngineConfig, get_engine_config, reset_engine_config
from .exceptions import (
    CatalogError,
    ConfigurationError,
    DecryptionError,
    DetectionError,
    EncryptionError,
    EnvelopeFormatError,
    MaskingError,
    PIIShieldError,
    SecurityError,
    TokenizationError,
    ValidationError,
)
from .hashing import hash_pii, hash_with_salt
from .security import (
    CryptoUtils,
    Envelope,
    PIIEncryptor,
    SecurityConfig,
    decrypt_pii,
    encrypt_pii,
)
from .types import (
    DEFAULT_MASKING_OPTIONS,
    AnonymizationRecord,
    LegalBasis,
    MaskingOptions,
    MaskingRule,
    PIICategory,
    PIIField,
    PIIFinding,
    PIIType,
    SensitivityLevel,
)

__all__ = [
    # Types
    "PIICategory",
    "SensitivityLevel",
    "MaskingRule",
    "LegalBasis",
    "PIIType",
    "PIIField",
    "MaskingOptions",
    "DEFAULT_MASKING_OPTIONS",
    "PIIFinding",
    "AnonymizationRecord",
    # Catalog
    "PIICatalog",
    "FieldConfig",
    "CatalogFileSchema",
    "default_catalog",
    # Configuration
    "EngineConfig",
    "get_engine_config",
    "reset_engine_config",
    # Hashing and encryption
    "hash_pii",
    "hash_with_salt",
    "SecurityConfig",
    "CryptoUtils",
    "Envelope",
    "PIIEncryptor",
    "encrypt_pii",
    "decrypt_pii",
    # Exceptions
    "PIIShieldError",
    "ValidationError",
    "ConfigurationError",
    "CatalogError",
    "MaskingError",
    "EncryptionError",
    "EnvelopeFormatError",
    "SecurityError",
    "DecryptionError",
    "TokenizationError",
    "DetectionError",
]

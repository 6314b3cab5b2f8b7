"""PIIShield exception hierarchy.

Every error raised by the engine carries a machine-readable error code, the
component it came from, structured context and optional recovery suggestions,
so that callers can log it as a structured event without ever logging the
protected value itself.
"""

from typing import Any, Dict, List, Optional


class PIIShieldError(Exception):
    """Base exception for all PIIShield errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional error context and metadata
        recovery_suggestions: List of suggested recovery actions
        component: Component where the error originated
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        component: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.component = component or self._infer_component()

    def _default_error_code(self) -> str:
        """Generate default error code based on exception class name."""
        return self.__class__.__name__.upper().replace("ERROR", "_ERROR")

    def _infer_component(self) -> str:
        """Infer component name from exception class."""
        name = self.__class__.__name__.lower()
        if "catalog" in name:
            return "catalog"
        elif "validation" in name or "configuration" in name:
            return "validation"
        elif "masking" in name:
            return "masking"
        elif "crypt" in name or "envelope" in name or "security" in name:
            return "encryption"
        elif "token" in name:
            return "tokenization"
        elif "detection" in name:
            return "detection"
        else:
            return "core"

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context to the error."""
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        """Add a recovery suggestion to help users resolve the error."""
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
        }


class ValidationError(PIIShieldError):
    """Raised when caller-supplied input or configuration is invalid."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if field_name:
            self.add_context("field_name", field_name)
        if expected_type:
            self.add_context("expected_type", expected_type)


class ConfigurationError(ValidationError):
    """Raised when engine configuration is invalid or incomplete."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if config_file:
            self.add_context("config_file", config_file)
        if config_section:
            self.add_context("config_section", config_section)


class CatalogError(ValidationError):
    """Raised when a PII field catalog cannot be loaded or is inconsistent."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        column_name: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if table_name:
            self.add_context("table_name", table_name)
        if column_name:
            self.add_context("column_name", column_name)


class MaskingError(PIIShieldError):
    """Raised when masking is asked to process something that is not a string.

    Malformed string values never raise; they degrade to a stronger mask.
    """

    def __init__(self, message: str, rule: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if rule:
            self.add_context("rule", rule)


class EncryptionError(PIIShieldError):
    """Raised when encryption cannot be performed."""

    def __init__(
        self, message: str, algorithm: Optional[str] = None, **kwargs: Any
    ):
        super().__init__(message, **kwargs)
        if algorithm:
            self.add_context("algorithm", algorithm)


class EnvelopeFormatError(EncryptionError):
    """Raised when a ciphertext envelope is not valid base64 or is truncated."""

    def __init__(
        self, message: str, envelope_length: Optional[int] = None, **kwargs: Any
    ):
        super().__init__(message, **kwargs)
        if envelope_length is not None:
            self.add_context("envelope_length", envelope_length)


class SecurityError(PIIShieldError):
    """Raised for security-relevant failures that callers must treat as events."""


class DecryptionError(SecurityError):
    """Raised when the authentication tag of an envelope does not verify.

    Signals either the wrong key material or a tampered/corrupted ciphertext.
    Retrying with the same inputs cannot succeed.
    """

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.add_recovery_suggestion("Verify the key material used for encryption")
        self.add_recovery_suggestion(
            "Treat repeated failures as possible tampering and audit the source"
        )


class TokenizationError(PIIShieldError):
    """Raised when the token store cannot issue a token."""

    def __init__(self, message: str, store_type: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if store_type:
            self.add_context("store_type", store_type)


class DetectionError(PIIShieldError):
    """Raised when detection input is not text."""


def create_validation_error(
    message: str,
    field_name: str,
    expected: Any,
) -> ValidationError:
    """Create a validation error with standard context."""
    expected_str = expected.__name__ if isinstance(expected, type) else str(expected)

    error = ValidationError(
        message=message,
        field_name=field_name,
        expected_type=expected_str,
    )

    error.add_recovery_suggestion(f"Ensure {field_name} is of type {expected_str}")
    return error

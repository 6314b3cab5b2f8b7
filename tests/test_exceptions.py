"""Tests for the exception hierarchy."""

import pytest

from piishield.core.exceptions import (
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
    create_validation_error,
)


class TestPIIShieldError:
    """Test the base error."""

    def test_defaults(self):
        error = PIIShieldError("something failed")

        assert str(error) == "something failed"
        assert error.error_code == "PIISHIELD_ERROR"
        assert error.component == "core"
        assert error.context == {}
        assert error.recovery_suggestions == []

    def test_context_and_suggestions(self):
        error = PIIShieldError("failed", context={"a": 1})
        error.add_context("b", 2)
        error.add_recovery_suggestion("try again")
        error.add_recovery_suggestion("try again")

        assert error.context == {"a": 1, "b": 2}
        assert error.recovery_suggestions == ["try again"]

    def test_to_dict(self):
        data = TokenizationError("no token", store_type="sqlite").to_dict()

        assert data == {
            "error_type": "TokenizationError",
            "message": "no token",
            "error_code": "TOKENIZATION_ERROR",
            "component": "tokenization",
            "context": {"store_type": "sqlite"},
            "recovery_suggestions": [],
        }


class TestHierarchy:
    """Test subclass relationships and inferred components."""

    @pytest.mark.parametrize(
        "error_cls, parent, component",
        [
            (ValidationError, PIIShieldError, "validation"),
            (ConfigurationError, ValidationError, "validation"),
            (CatalogError, ValidationError, "catalog"),
            (MaskingError, PIIShieldError, "masking"),
            (EncryptionError, PIIShieldError, "encryption"),
            (EnvelopeFormatError, EncryptionError, "encryption"),
            (SecurityError, PIIShieldError, "encryption"),
            (DecryptionError, SecurityError, "encryption"),
            (TokenizationError, PIIShieldError, "tokenization"),
            (DetectionError, PIIShieldError, "detection"),
        ],
    )
    def test_parent_and_component(self, error_cls, parent, component):
        error = error_cls("message")
        assert isinstance(error, parent)
        assert error.component == component

    def test_decryption_error_has_suggestions(self):
        assert len(DecryptionError("bad tag").recovery_suggestions) == 2

    def test_specific_context(self):
        assert ConfigurationError("x", config_section="security").context == {
            "config_section": "security"
        }
        assert CatalogError("x", table_name="t", column_name="c").context == {
            "table_name": "t",
            "column_name": "c",
        }
        assert MaskingError("x", rule="ssn").context == {"rule": "ssn"}
        assert EncryptionError("x", algorithm="AES-GCM-256").context == {
            "algorithm": "AES-GCM-256"
        }
        assert DetectionError("x").context == {}

    def test_detection_error_takes_no_type_context(self):
        with pytest.raises(TypeError):
            DetectionError("x", pii_type="email")


class TestCreateValidationError:
    """Test the validation error helper."""

    def test_helper(self):
        error = create_validation_error("bad value", "mask_char", str)

        assert error.context == {"field_name": "mask_char", "expected_type": "str"}
        assert error.recovery_suggestions == ["Ensure mask_char is of type str"]

"""Tests for the PIIShieldEngine facade."""

import pytest

from piishield import (
    DeletionResult,
    EngineConfig,
    InMemoryTokenStore,
    PIICatalog,
    PIIField,
    PIIShieldEngine,
    generate_anonymous_id,
)
from piishield.anonymization import LOCATION_DELETED_MARKER
from piishield.core.exceptions import CatalogError, DecryptionError
from piishield.core.types import PIIType


class TestEngineConstruction:
    """Test engine defaults and configuration."""

    def test_defaults(self):
        engine = PIIShieldEngine()

        assert isinstance(engine.token_store, InMemoryTokenStore)
        assert len(engine.catalog) == 9
        assert engine.config.token_prefix == "TOK_"

    def test_environment_configuration(self, monkeypatch):
        monkeypatch.setenv("PIISHIELD_TOKEN_PREFIX", "ENV_")
        engine = PIIShieldEngine()
        assert engine.tokenize("value").startswith("ENV_")

    def test_configured_mask_char(self):
        engine = PIIShieldEngine(config=EngineConfig(mask_char="#"))
        assert engine.mask("123-45-6789", "ssn") == "###-##-6789"

    def test_injected_store_is_used(self, engine, memory_store):
        token = engine.tokenize("alice@example.com")
        assert memory_store.get_by_token(token) == "alice@example.com"


class TestValueOperations:
    """Test single-value operations through the engine."""

    def test_mask(self, engine):
        assert engine.mask("jane.doe@example.com", "email") == "j*******@*******.com"

    def test_hash(self, engine):
        assert engine.hash("x") == engine.hash("x")
        assert engine.hash_with_salt("x", "s") != engine.hash("x")

    def test_encrypt_round_trip(self, engine, key_material):
        envelope = engine.encrypt("123-45-6789", key_material)
        assert engine.decrypt(envelope, key_material) == "123-45-6789"

    def test_decrypt_wrong_key(self, engine, key_material):
        envelope = engine.encrypt("123-45-6789", key_material)
        with pytest.raises(DecryptionError):
            engine.decrypt(envelope, "wrong")

    def test_tokenize_round_trip(self, engine):
        token = engine.tokenize("123-45-6789")

        assert engine.tokenize("123-45-6789") == token
        assert engine.detokenize(token) == "123-45-6789"
        assert engine.detokenize("TOK_unknown") is None

    def test_detect_and_redact(self, engine):
        text = "Call 312-555-1234 or email a@b.com"

        assert {f.type for f in engine.detect(text)} == {PIIType.PHONE, PIIType.EMAIL}
        assert engine.redact(text) == "Call [REDACTED_PHONE] or email [REDACTED_EMAIL]"
        assert engine.contains_pii(text)

    def test_anonymous_id_uses_configured_salt(self, engine):
        assert engine.anonymous_id("user-1") == generate_anonymous_id("user-1", "pepper")
        assert engine.anonymous_id("user-1") != generate_anonymous_id("user-1")

    def test_anonymize(self, engine):
        assert engine.anonymize({"a": "x", "b": "y"}, ["a"]) == {"a": "[REDACTED]", "b": "y"}


class TestCatalogOperations:
    """Test operations driven by the catalog."""

    def test_mask_field_uses_declared_rule(self, engine):
        assert engine.mask_field("w9_submissions", "tax_id", "123-45-6789") == "***-**-6789"

    def test_mask_field_without_rule_fully_masks(self, engine):
        assert engine.mask_field("profiles", "avatar_url", "abc.png") == "*******"

    def test_mask_field_unknown_column(self, engine):
        with pytest.raises(CatalogError, match="not in the PII catalog"):
            engine.mask_field("profiles", "shoe_size", "42")

    def test_export_masks_highly_sensitive_only(self, engine, w9_record):
        exported = engine.export_record("w9_submissions", w9_record)

        assert exported["tax_id"] == "***-**-6789"
        assert exported["legal_name"] == "Jane Q. Doe"
        assert exported["form_year"] == 2024
        assert w9_record["tax_id"] == "123-45-6789"

    def test_export_profile_unchanged(self, engine, profile_record):
        assert engine.export_record("profiles", profile_record) == profile_record

    def test_export_with_custom_mask_char(self, w9_record):
        engine = PIIShieldEngine(config=EngineConfig(mask_char="#"))
        assert engine.export_record("w9_submissions", w9_record)["tax_id"] == "###-##-6789"

    def test_unknown_table(self, engine):
        with pytest.raises(CatalogError, match="No PII fields"):
            engine.export_record("invoices", {})

    def test_delete_profile(self, engine, profile_record):
        result = engine.delete_record("profiles", profile_record, "user-1")
        placeholder = f"[DELETED_{engine.anonymous_id('user-1')}]"

        assert isinstance(result, DeletionResult)
        assert result.record == {
            "id": "profile-42",
            "email": placeholder,
            "full_name": placeholder,
            "phone": placeholder,
            "avatar_url": placeholder,
            "bio": "Vintage furniture collector",
        }
        assert result.audit.record_id == "profile-42"
        assert result.audit.anonymized_user_id == engine.anonymous_id("user-1")
        assert result.audit.anonymized_fields == ("email", "full_name", "phone", "avatar_url")

    def test_delete_location_and_behavioral(self, engine):
        orders = engine.delete_record(
            "orders", {"shipping_address": "1 Main St, Chicago, IL"}, "user-1", record_id="o-1"
        )
        messages = engine.delete_record("messages", {"content": "hello"}, "user-1")

        assert orders.record["shipping_address"] == LOCATION_DELETED_MARKER
        assert orders.audit.record_id == "o-1"
        assert orders.audit.anonymized_fields == ("shipping_address",)
        assert messages.record["content"] is None
        assert messages.audit.record_id == ""

    def test_custom_catalog(self, small_catalog):
        engine = PIIShieldEngine(catalog=small_catalog)
        result = engine.delete_record(
            "customers", {"ssn": "123-45-6789", "city": "Chicago"}, "user-1"
        )

        assert result.record["ssn"].startswith("[DELETED_ANON_")
        assert result.record["city"] == LOCATION_DELETED_MARKER

    def test_empty_catalog_rejects_records(self):
        engine = PIIShieldEngine(catalog=PIICatalog())
        with pytest.raises(CatalogError):
            engine.delete_record("profiles", {"email": "a@b.com"}, "user-1")

    def test_scan_record(self, engine):
        record = {"bio": "mail me at a@b.com or a@c.org", "age": 31, "city": "Chicago"}
        assert engine.scan_record(record) == {"bio": {"email": 2}}


class TestPIIFieldInCatalog:
    """Fields added at runtime are honored by record operations."""

    def test_added_field(self):
        catalog = PIICatalog()
        catalog.add(PIIField("t", "secret", "health"))
        engine = PIIShieldEngine(catalog=catalog)

        assert engine.delete_record("t", {"secret": "x"}, "u").record == {"secret": "[DELETED]"}

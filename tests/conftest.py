"""Shared fixtures for PIIShield tests."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from piishield import (
    EngineConfig,
    InMemoryTokenStore,
    PIICatalog,
    PIIField,
    PIIShieldEngine,
    SQLiteTokenStore,
    default_catalog,
)
from piishield.core.config import reset_engine_config
from piishield.core.types import MaskingRule, PIICategory, SensitivityLevel
from piishield.observability import ObservabilityConfig, set_config

KEY_MATERIAL = "correct horse battery staple"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep environment-driven configuration from leaking between tests."""
    for var in (
        "PIISHIELD_PBKDF2_ITERATIONS",
        "PIISHIELD_TOKEN_PREFIX",
        "PIISHIELD_MASK_CHAR",
        "PIISHIELD_ANON_SALT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_engine_config()
    set_config(ObservabilityConfig())
    yield
    reset_engine_config()


@pytest.fixture
def key_material() -> str:
    return KEY_MATERIAL


@pytest.fixture
def profile_record() -> dict[str, Any]:
    """A profiles row as the application stores it."""
    return {
        "id": "profile-42",
        "email": "jane.doe@example.com",
        "full_name": "Jane Doe",
        "phone": "(312) 555-1234",
        "avatar_url": "https://cdn.example.com/a/42.png",
        "bio": "Vintage furniture collector",
    }


@pytest.fixture
def w9_record() -> dict[str, Any]:
    return {
        "id": "w9-7",
        "legal_name": "Jane Q. Doe",
        "tax_id": "123-45-6789",
        "form_year": 2024,
    }


@pytest.fixture
def mixed_fields() -> list[PIIField]:
    """One field per category, on a single table."""
    return [
        PIIField("people", "ssn", PIICategory.IDENTIFIER, masking_rule=MaskingRule.SSN),
        PIIField("people", "card", PIICategory.FINANCIAL),
        PIIField("people", "diagnosis", PIICategory.HEALTH),
        PIIField("people", "fingerprint", PIICategory.BIOMETRIC),
        PIIField("people", "genome", PIICategory.GENETIC),
        PIIField("people", "city", PIICategory.LOCATION),
        PIIField("people", "notes", PIICategory.BEHAVIORAL),
    ]


@pytest.fixture
def catalog() -> PIICatalog:
    return default_catalog()


@pytest.fixture
def small_catalog() -> PIICatalog:
    return PIICatalog(
        [
            PIIField(
                "customers",
                "ssn",
                PIICategory.IDENTIFIER,
                sensitivity_level=SensitivityLevel.HIGHLY_SENSITIVE,
                masking_rule=MaskingRule.SSN,
            ),
            PIIField("customers", "city", PIICategory.LOCATION),
            PIIField("customers", "notes", PIICategory.BEHAVIORAL),
        ]
    )


@pytest.fixture
def memory_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> Generator[SQLiteTokenStore, None, None]:
    store = SQLiteTokenStore(f"sqlite:///{tmp_path / 'tokens.db'}")
    yield store
    store.close()


@pytest.fixture
def engine(memory_store: InMemoryTokenStore) -> PIIShieldEngine:
    """Engine with explicit configuration and an in-memory token store."""
    return PIIShieldEngine(
        config=EngineConfig(anonymous_id_salt="pepper"),
        token_store=memory_store,
    )

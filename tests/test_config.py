"""Tests for engine and logging configuration."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from piishield.core.config import EngineConfig, get_engine_config, reset_engine_config
from piishield.core.security import DEFAULT_PBKDF2_ITERATIONS, SecurityConfig
from piishield.observability import LoggingConfig, ObservabilityConfig, get_config, set_config


class TestEngineConfig:
    """Test engine configuration."""

    def test_defaults(self):
        config = EngineConfig()

        assert config.pbkdf2_iterations == DEFAULT_PBKDF2_ITERATIONS
        assert config.token_prefix == "TOK_"
        assert config.mask_char == "*"
        assert config.anonymous_id_salt == ""

    def test_security_config(self):
        security = EngineConfig(pbkdf2_iterations=150000).security
        assert isinstance(security, SecurityConfig)
        assert security.pbkdf2_iterations == 150000

    def test_invalid_values_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="piishield.core.config"):
            config = EngineConfig(pbkdf2_iterations=10, mask_char="##", token_prefix="")

        assert config.pbkdf2_iterations == DEFAULT_PBKDF2_ITERATIONS
        assert config.mask_char == "*"
        assert config.token_prefix == "TOK_"
        assert "pbkdf2_iterations" in caplog.text

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("PIISHIELD_PBKDF2_ITERATIONS", "250000")
        monkeypatch.setenv("PIISHIELD_TOKEN_PREFIX", "PII_")
        monkeypatch.setenv("PIISHIELD_MASK_CHAR", "#")
        monkeypatch.setenv("PIISHIELD_ANON_SALT", "pepper")

        config = EngineConfig.from_environment()

        assert config.pbkdf2_iterations == 250000
        assert config.token_prefix == "PII_"
        assert config.mask_char == "#"
        assert config.anonymous_id_salt == "pepper"

    def test_from_environment_invalid_integer(self, monkeypatch):
        monkeypatch.setenv("PIISHIELD_PBKDF2_ITERATIONS", "lots")
        assert EngineConfig.from_environment().pbkdf2_iterations == DEFAULT_PBKDF2_ITERATIONS

    def test_to_dict_hides_salt(self):
        data = EngineConfig(anonymous_id_salt="pepper").to_dict()

        assert "pepper" not in str(data)
        assert data["anonymous_id_salt_set"] is True

    def test_global_config_cached(self, monkeypatch):
        monkeypatch.setenv("PIISHIELD_TOKEN_PREFIX", "ONE_")
        first = get_engine_config()
        monkeypatch.setenv("PIISHIELD_TOKEN_PREFIX", "TWO_")

        assert get_engine_config() is first
        reset_engine_config()
        assert get_engine_config().token_prefix == "TWO_"


class TestLoggingConfig:
    """Test logging configuration models."""

    def test_defaults(self):
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.format == "json"
        assert config.enable_tracing is True

    def test_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(PydanticValidationError):
            LoggingConfig(level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(PydanticValidationError):
            LoggingConfig(format="xml")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PIISHIELD_LOG_LEVEL", "warning")
        monkeypatch.setenv("PIISHIELD_LOG_FORMAT", "text")
        monkeypatch.setenv("PIISHIELD_LOG_TRACING", "false")

        config = ObservabilityConfig.from_env()

        assert config.logging.level == "WARNING"
        assert config.logging.format == "text"
        assert config.logging.enable_tracing is False

    def test_from_file(self, tmp_path: Path):
        path = tmp_path / "observability.yaml"
        path.write_text("observability:\n  logging:\n    level: error\n    format: text\n")

        config = ObservabilityConfig.from_file(path)

        assert config.logging.level == "ERROR"
        assert config.logging.format == "text"

    def test_from_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ObservabilityConfig.from_file(tmp_path / "absent.yaml")

    def test_set_and_get(self):
        config = ObservabilityConfig(logging=LoggingConfig(level="DEBUG"))
        set_config(config)
        assert get_config() is config
        assert get_config().to_dict()["logging"]["level"] == "DEBUG"

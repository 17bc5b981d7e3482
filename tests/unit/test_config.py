"""Unit tests for configuration management."""

import json
import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from fieldrules.config import (
    FieldrulesConfig,
    LoggingConfig,
    LogLevel,
    ValidationConfig,
    configure_logging,
    create_default_config,
    find_config_file,
    load_config,
)
from fieldrules.validator import ValidationMode


class TestValidationConfig:
    """Test ValidationConfig model."""

    def test_defaults(self):
        """Test default validation settings."""
        config = ValidationConfig()
        assert config.mode == ValidationMode.COLLECT_ALL
        assert config.catch_rule_errors is True

    def test_aliases(self):
        """Test camelCase aliases and field names are both accepted."""
        assert ValidationConfig(catchRuleErrors=False).catch_rule_errors is False
        assert ValidationConfig(catch_rule_errors=False).catch_rule_errors is False

    def test_invalid_mode(self):
        """Test unknown validation mode is rejected."""
        with pytest.raises(ValueError):
            ValidationConfig(mode="sometimes")


class TestFieldrulesConfig:
    """Test complete FieldrulesConfig model."""

    def test_config_from_dict(self):
        """Test config creation from dictionary."""
        config_data = {
            "validation": {
                "mode": "first_per_field",
                "catchRuleErrors": False
            },
            "logging": {
                "level": "debug"
            }
        }

        config = FieldrulesConfig(**config_data)
        assert config.validation.mode == ValidationMode.FIRST_PER_FIELD
        assert config.validation.catch_rule_errors is False
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.numeric_level == logging.DEBUG

    def test_config_extra_fields_forbidden(self):
        """Test that extra fields are rejected."""
        with pytest.raises(ValueError):
            FieldrulesConfig(invalid_field="should-fail")

    def test_log_level_mapping(self):
        """Test warn maps to the stdlib WARNING level."""
        assert LoggingConfig().numeric_level == logging.WARNING
        assert LoggingConfig(level="error").numeric_level == logging.ERROR


class TestConfigFileOperations:
    """Test configuration file loading and discovery."""

    def test_load_config_with_file(self):
        """Test loading config from existing file."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".fieldrules.json"
            with open(config_file, "w") as f:
                json.dump({"validation": {"mode": "first_failure"}}, f)

            config = load_config(config_file)
            assert config.validation.mode == ValidationMode.FIRST_FAILURE

    def test_load_config_file_not_found(self):
        """Test loading config when file doesn't exist."""
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "nonexistent.json")
            # Should return default config
            assert config.validation.mode == ValidationMode.COLLECT_ALL

    def test_load_config_invalid_json(self):
        """Test loading config with invalid JSON."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".fieldrules.json"
            config_file.write_text("{invalid json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_config_invalid_structure(self):
        """Test loading config with invalid structure."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".fieldrules.json"
            config_file.write_text(json.dumps({"invalid": "structure"}))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_find_config_file_parent_dir(self):
        """Test finding config file in parent directory."""
        with TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".fieldrules.json"
            config_file.touch()

            sub_dir = temp_path / "a" / "b"
            sub_dir.mkdir(parents=True)

            assert find_config_file(sub_dir) == config_file.resolve()

    def test_find_config_file_not_found(self):
        """Test config file discovery when not found."""
        with TemporaryDirectory() as temp_dir:
            with patch.object(Path, "exists", return_value=False):
                assert find_config_file(Path(temp_dir)) is None

    def test_zero_config_operation(self):
        """Test zero-config operation with defaults."""
        with patch("fieldrules.config.find_config_file", return_value=None):
            config = load_config()
            assert config == create_default_config()

    def test_configure_logging(self):
        """Test the logging section is applied to the package logger."""
        logger = logging.getLogger("fieldrules")
        previous = logger.level
        try:
            configure_logging(FieldrulesConfig(logging={"level": "info"}))
            assert logger.level == logging.INFO
        finally:
            logger.setLevel(previous)

"""Tests for stest.core.validators."""
import pytest

from stest.core.constants import ErrorCode
from stest.core.validators import (
    ValidationError,
    validate_config,
    validate_defaults_config,
    validate_logging_config,
    validate_path,
)


class TestValidationError:
    """Test ValidationError."""

    def test_default_code(self):
        """Defaults to INVALID_INPUT."""
        error = ValidationError("bad")
        assert str(error) == "bad"
        assert error.error_code == ErrorCode.INVALID_INPUT

    def test_custom_code(self):
        """Keeps a custom code."""
        assert ValidationError("bad", ErrorCode.NOT_FOUND).error_code == ErrorCode.NOT_FOUND


class TestValidateConfig:
    """Test validate_config."""

    def test_empty(self):
        """An empty configuration is valid."""
        assert validate_config({}) is True

    def test_full(self):
        """A complete configuration is valid."""
        config = {
            "logging": {"level": "debug", "file": "/tmp/stest.log"},
            "defaults": {"hidden": True, "quiet": False},
        }
        assert validate_config(config) is True

    def test_not_dict(self):
        """Non-dict configuration is rejected."""
        with pytest.raises(ValidationError, match="dictionary"):
            validate_config(["logging"])

    def test_unknown_section(self):
        """Unknown sections are rejected."""
        with pytest.raises(ValidationError, match="cache"):
            validate_config({"cache": {}})


class TestValidateLoggingConfig:
    """Test validate_logging_config."""

    @pytest.mark.parametrize("level", ["DEBUG", "info", "Warning", "ERROR", "CRITICAL"])
    def test_levels(self, level):
        """Known levels are accepted in any case."""
        assert validate_logging_config({"level": level}) is True

    def test_bad_level(self):
        """Unknown levels are rejected."""
        with pytest.raises(ValidationError, match="log level"):
            validate_logging_config({"level": "LOUD"})

    def test_non_string_level(self):
        """Numeric levels are rejected."""
        with pytest.raises(ValidationError):
            validate_logging_config({"level": 10})

    def test_null_file(self):
        """A null log file is allowed."""
        assert validate_logging_config({"file": None}) is True

    def test_bad_file(self):
        """An empty log file path is rejected."""
        with pytest.raises(ValidationError):
            validate_logging_config({"file": ""})

    def test_unknown_field(self):
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError, match="format"):
            validate_logging_config({"format": "%(message)s"})

    def test_not_dict(self):
        """Section must be a dictionary."""
        with pytest.raises(ValidationError):
            validate_logging_config("DEBUG")


class TestValidateDefaultsConfig:
    """Test validate_defaults_config."""

    def test_valid(self):
        """Boolean values for known options are accepted."""
        assert validate_defaults_config({"hidden": True, "not_empty": False}) is True

    def test_unknown_option(self):
        """Unknown options are rejected."""
        with pytest.raises(ValidationError, match="sticky"):
            validate_defaults_config({"sticky": True})

    def test_reference_paths_not_allowed(self):
        """Age tests cannot be given defaults."""
        with pytest.raises(ValidationError):
            validate_defaults_config({"newer_than": True})

    def test_non_boolean(self):
        """Values must be booleans."""
        with pytest.raises(ValidationError, match="boolean"):
            validate_defaults_config({"hidden": "yes"})

    def test_not_dict(self):
        """Section must be a dictionary."""
        with pytest.raises(ValidationError):
            validate_defaults_config(["hidden"])


class TestValidatePath:
    """Test validate_path."""

    def test_valid(self):
        """Normal paths are accepted."""
        assert validate_path("/var/log/stest.log") is True

    def test_empty(self):
        """Empty paths are rejected."""
        with pytest.raises(ValidationError, match="empty"):
            validate_path("")

    def test_null_byte(self):
        """Null bytes are rejected."""
        with pytest.raises(ValidationError, match="null"):
            validate_path("a\0b")

    def test_non_string(self):
        """Non-strings are rejected."""
        with pytest.raises(ValidationError, match="string"):
            validate_path(42)

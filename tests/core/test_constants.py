"""Tests for stest.core.constants."""
import os
import stat

import pytest

from stest.core.constants import (
    DEFAULT_CONFIG,
    HIDDEN_PREFIX,
    OPTION_FLAGS,
    ConfigKey,
    ErrorCode,
    ExitCode,
    FileType,
)
from stest.rules.options import TEST_ORDER, TestOptions


class TestFileType:
    """Test FileType.from_mode."""

    @pytest.mark.parametrize(
        "mode,expected",
        [
            (stat.S_IFREG | 0o644, FileType.REGULAR),
            (stat.S_IFDIR | 0o755, FileType.DIRECTORY),
            (stat.S_IFLNK | 0o777, FileType.SYMLINK),
            (stat.S_IFBLK | 0o660, FileType.BLOCK_DEVICE),
            (stat.S_IFCHR | 0o666, FileType.CHARACTER_DEVICE),
            (stat.S_IFIFO | 0o644, FileType.FIFO),
            (stat.S_IFSOCK | 0o755, FileType.SOCKET),
            (0, FileType.UNKNOWN),
        ],
    )
    def test_from_mode(self, mode, expected):
        """Classifies raw mode bits."""
        assert FileType.from_mode(mode) is expected

    def test_permission_bits_ignored(self):
        """Set-id bits do not change the type."""
        assert FileType.from_mode(stat.S_IFREG | stat.S_ISUID | stat.S_ISGID | 0o755) is FileType.REGULAR

    def test_real_file(self, tmp_path):
        """Works on a real stat result."""
        path = tmp_path / "f"
        path.write_text("x")

        assert FileType.from_mode(os.stat(path).st_mode) is FileType.REGULAR
        assert FileType.from_mode(os.stat(tmp_path).st_mode) is FileType.DIRECTORY


class TestCodes:
    """Test error and exit codes."""

    def test_exit_codes(self):
        """Exit codes follow test(1) conventions."""
        assert ExitCode.PASSED == 0
        assert ExitCode.FAILED == 1
        assert ExitCode.ERROR == 2
        assert ExitCode.INTERRUPTED == 130

    def test_error_codes_unique(self):
        """Error codes do not collide."""
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))
        assert ErrorCode.INVALID_INPUT == 1


class TestOptionFlags:
    """Test that configurable flags line up with TestOptions."""

    def test_flags_are_boolean_fields(self):
        """Every flag is a boolean TestOptions field."""
        options = TestOptions()
        for name in OPTION_FLAGS:
            assert getattr(options, name) is False

    def test_flags_cover_boolean_tests(self):
        """Every boolean test can be given a default."""
        for name in TEST_ORDER:
            if name not in ("newer_than", "older_than"):
                assert name in OPTION_FLAGS


class TestDefaults:
    """Test default configuration."""

    def test_default_config(self):
        """Defaults log warnings only and enable nothing."""
        assert DEFAULT_CONFIG[ConfigKey.LOGGING][ConfigKey.LOG_LEVEL] == "WARNING"
        assert DEFAULT_CONFIG[ConfigKey.LOGGING][ConfigKey.LOG_FILE] is None
        assert DEFAULT_CONFIG[ConfigKey.DEFAULTS] == {}

    def test_hidden_prefix(self):
        """Hidden names start with a dot."""
        assert HIDDEN_PREFIX == "."

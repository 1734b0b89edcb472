#!/usr/bin/env python3
"""Tests for reference time resolution."""

import os
from unittest.mock import patch

import pytest

from stest.core.constants import ErrorCode
from stest.rules.options import TestOptions
from stest.rules.reference import ReferenceTimeError, resolve_reference_time


class TestResolveReferenceTime:
    """Tests for resolve_reference_time."""

    def test_no_age_test(self):
        """Nothing is resolved without newer/older."""
        with patch("stest.rules.reference.os.stat") as mock_stat:
            assert resolve_reference_time(TestOptions(regular=True)) is None

        mock_stat.assert_not_called()

    def test_newer_than(self, aged_files):
        """Resolves the newer-than file's mtime in nanoseconds."""
        ref = aged_files[0]

        assert resolve_reference_time(TestOptions(newer_than=str(ref))) == os.stat(ref).st_mtime_ns

    def test_older_than(self, aged_files):
        """Resolves the older-than file's mtime."""
        old = aged_files[1]

        assert resolve_reference_time(TestOptions(older_than=str(old))) == os.stat(old).st_mtime_ns

    def test_follows_symlink(self, aged_files, temp_dir):
        """A link as reference uses its target's mtime."""
        ref = aged_files[0]
        link = temp_dir / "ref-link"
        link.symlink_to(ref)

        assert resolve_reference_time(TestOptions(newer_than=str(link))) == os.stat(ref).st_mtime_ns

    def test_missing_file(self, temp_dir):
        """A missing reference raises ReferenceTimeError."""
        with pytest.raises(ReferenceTimeError) as exc_info:
            resolve_reference_time(TestOptions(newer_than=str(temp_dir / "nope")))

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND
        assert "nope" in str(exc_info.value)

    def test_is_io_error(self, temp_dir):
        """ReferenceTimeError is an IOError."""
        with pytest.raises(IOError):
            resolve_reference_time(TestOptions(older_than=str(temp_dir / "nope")))

    def test_permission_denied(self, aged_files):
        """Permission errors are reported with their own code."""
        with patch("stest.rules.reference.os.stat", side_effect=PermissionError("denied")):
            with pytest.raises(ReferenceTimeError) as exc_info:
                resolve_reference_time(TestOptions(newer_than=str(aged_files[0])))

        assert exc_info.value.error_code == ErrorCode.PERMISSION_DENIED

    def test_invalid_path(self):
        """A path the OS cannot take is also fatal."""
        with pytest.raises(ReferenceTimeError):
            resolve_reference_time(TestOptions(newer_than="bad\0ref"))

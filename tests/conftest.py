"""Shared pytest fixtures for stest tests."""
import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Generator, Tuple

import pytest
import yaml

import stest.core.logging as stest_logging
from stest.core.logging import Logger, LogLevel

# Arbitrary fixed timestamps (nanoseconds) for age tests
T_OLD = 1_600_000_000 * 10**9
T_REF = 1_700_000_000 * 10**9
T_NEW = 1_750_000_000 * 10**9

IS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def tree(temp_dir: Path) -> Path:
    """Create a directory with one entry of each common kind.

    tree/
        a.txt        regular, 5 bytes, 0644
        empty.txt    regular, 0 bytes
        script.sh    regular, 0755
        .hidden      regular, hidden name
        sub/         directory
            nested.txt
        link         symlink -> a.txt
        broken       symlink -> missing
    """
    root = temp_dir / "tree"
    root.mkdir()

    (root / "a.txt").write_text("hello")
    (root / "a.txt").chmod(0o644)
    (root / "empty.txt").write_text("")
    (root / "script.sh").write_text("#!/bin/sh\necho hi\n")
    (root / "script.sh").chmod(0o755)
    (root / ".hidden").write_text("hidden")

    (root / "sub").mkdir()
    (root / "sub" / "nested.txt").write_text("nested")

    (root / "link").symlink_to(root / "a.txt")
    (root / "broken").symlink_to(root / "missing")

    return root


@pytest.fixture
def fifo(temp_dir: Path) -> Path:
    """Create a named pipe."""
    if not hasattr(os, "mkfifo"):
        pytest.skip("Named pipes not supported on this platform")
    path = temp_dir / "pipe"
    os.mkfifo(path)
    return path


@pytest.fixture
def aged_files(temp_dir: Path) -> Tuple[Path, Path, Path, Path]:
    """Create reference, older, newer and same-age files with fixed mtimes."""
    paths = []
    for name, mtime in (("ref", T_REF), ("old", T_OLD), ("new", T_NEW), ("same", T_REF)):
        path = temp_dir / name
        path.write_text(name)
        os.utime(path, ns=(mtime, mtime))
        paths.append(path)
    return tuple(paths)


@pytest.fixture
def log_capture() -> Tuple[Logger, io.StringIO]:
    """Debug-level logger writing plain messages into a buffer."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger = Logger(name="stest.test", level=LogLevel.DEBUG, handlers=[handler])
    return logger, stream


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "stest.yaml"
    with open(config_path, "w") as f:
        yaml.dump({"logging": {"level": "INFO"}, "defaults": {"hidden": True}}, f)
    return config_path


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep user config and STEST_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith("STEST_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    yield
    stest_logging._global_logger = None

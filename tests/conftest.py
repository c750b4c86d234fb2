"""
Shared test fixtures and configuration.

Fake executables are small ``#!/bin/sh`` scripts written into a
temporary ``bin`` directory, which becomes the only entry on PATH.
"""

import shutil
from pathlib import Path

import pytest

from src.core.models.environment import EnvContext


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return a temporary home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def fake_bin(tmp_path: Path) -> Path:
    """Return an empty directory for fake executables."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return bin_dir


@pytest.fixture
def make_exe(fake_bin: Path):
    """Factory: write an executable shell script into ``fake_bin``."""

    def _make(name: str, body: str = "exit 0", directory: Path | None = None) -> Path:
        target = (directory or fake_bin) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f"#!/bin/sh\n{body}\n")
        target.chmod(0o755)
        return target

    return _make


@pytest.fixture
def link_system_tools(fake_bin: Path):
    """Factory: symlink real system tools (sh, cat, ...) into ``fake_bin``."""

    def _link(*names: str) -> None:
        for name in names:
            real = shutil.which(name)
            if real is None:
                pytest.skip(f"{name} not available on this host")
            (fake_bin / name).symlink_to(real)

    return _link


@pytest.fixture
def make_context(home: Path, fake_bin: Path):
    """Factory: EnvContext whose PATH is only ``fake_bin``."""

    def _make(shell: str = "/bin/bash", **extra: str) -> EnvContext:
        environ = {"HOME": str(home), "SHELL": shell, "PATH": str(fake_bin)}
        environ.update(extra)
        return EnvContext.from_environ(environ)

    return _make

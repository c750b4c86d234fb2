"""
Installer strategy and toolchain state tags.

Exactly one strategy is selected per run.  The toolchain state is a
two-state machine: NOT_INSTALLED → INSTALLED by fresh install,
INSTALLED → INSTALLED by update.
"""

from __future__ import annotations

from enum import StrEnum


class InstallerStrategy(StrEnum):
    """Package-manager specific install chain."""

    APT_BASED = "apt"
    YUM_BASED = "yum"
    DNF_BASED = "dnf"
    PACMAN_BASED = "pacman"
    UNSUPPORTED = "unsupported"


class ToolchainState(StrEnum):
    """Whether the toolchain manager (rustup) is already present."""

    NOT_INSTALLED = "not_installed"
    INSTALLED = "installed"

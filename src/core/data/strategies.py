"""
L0 Data — Package-manager install chains.

Probe order is fixed: the first manager found on the search path wins.
Each chain runs with fail-fast semantics, so the library install only
happens after the refresh / dev-tools step succeeded.
"""

from __future__ import annotations

from src.core.models.command import CommandSpec, PlannedStep
from src.core.models.strategy import InstallerStrategy

STRATEGY_PRIORITY: tuple[tuple[str, InstallerStrategy], ...] = (
    ("apt", InstallerStrategy.APT_BASED),
    ("yum", InstallerStrategy.YUM_BASED),
    ("dnf", InstallerStrategy.DNF_BASED),
    ("pacman", InstallerStrategy.PACMAN_BASED),
)


def _sudo(program: str, *args: str) -> CommandSpec:
    return CommandSpec(program=program, args=args, needs_sudo=True)


STRATEGY_STEPS: dict[InstallerStrategy, tuple[PlannedStep, ...]] = {
    InstallerStrategy.APT_BASED: (
        PlannedStep(
            label="Updating package lists",
            command=_sudo("apt", "update"),
        ),
        PlannedStep(
            label="Installing build tools",
            command=_sudo("apt", "install", "-y", "build-essential", "libssl-dev", "curl"),
        ),
    ),
    InstallerStrategy.YUM_BASED: (
        PlannedStep(
            label="Installing development tools",
            command=_sudo("yum", "groupinstall", "-y", "Development Tools"),
        ),
        PlannedStep(
            label="Installing system libraries",
            command=_sudo("yum", "install", "-y", "openssl-devel", "curl"),
        ),
    ),
    InstallerStrategy.DNF_BASED: (
        PlannedStep(
            label="Installing development tools",
            command=_sudo("dnf", "groupinstall", "-y", "Development Tools"),
        ),
        PlannedStep(
            label="Installing system libraries",
            command=_sudo("dnf", "install", "-y", "openssl-devel", "curl"),
        ),
    ),
    InstallerStrategy.PACMAN_BASED: (
        PlannedStep(
            label="Updating system packages",
            command=_sudo("pacman", "-Syu", "--noconfirm"),
        ),
        PlannedStep(
            label="Installing base-devel",
            command=_sudo("pacman", "-S", "--noconfirm", "base-devel", "openssl", "curl"),
        ),
    ),
    InstallerStrategy.UNSUPPORTED: (),
}

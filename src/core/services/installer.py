"""
Installer selection — package-manager probing and toolchain install.

``select_strategy`` probes the fixed priority list once per run.  The
chosen strategy's chain runs through the command runner with
fail-fast semantics.  The toolchain step is a two-state machine:
``rustup`` present → update in place, absent → bootstrap installer.
"""

from __future__ import annotations

import logging
import shlex
import shutil
from collections.abc import Callable

from src.core.data.constants import DEFAULT_INSTALLER_URL, TOOLCHAIN_MANAGER
from src.core.data.strategies import STRATEGY_PRIORITY, STRATEGY_STEPS
from src.core.errors import (
    StepFailedError,
    ToolchainInstallError,
    UnsupportedEnvironmentError,
)
from src.core.models.command import ChainResult, CommandSpec, PlannedStep
from src.core.models.environment import EnvContext
from src.core.models.strategy import InstallerStrategy, ToolchainState
from src.core.services.runner import Runner, run_chain, run_command

logger = logging.getLogger(__name__)

Which = Callable[..., str | None]


# ── Package manager ─────────────────────────────────────────────


def select_strategy(
    context: EnvContext,
    which: Which = shutil.which,
) -> InstallerStrategy:
    """Pick the first package manager found on the search path.

    Returns ``UNSUPPORTED`` when none of apt, yum, dnf, pacman exists.
    """
    for tool, strategy in STRATEGY_PRIORITY:
        if which(tool, path=context.search_path):
            logger.info("Package manager detected: %s", tool)
            return strategy
    logger.info("No supported package manager on PATH")
    return InstallerStrategy.UNSUPPORTED


def strategy_steps(strategy: InstallerStrategy) -> tuple[PlannedStep, ...]:
    return STRATEGY_STEPS[strategy]


def install_dependencies(
    context: EnvContext,
    strategy: InstallerStrategy,
    *,
    runner: Runner = run_command,
) -> ChainResult:
    """Run the strategy's install chain.

    Raises:
        UnsupportedEnvironmentError: No recognised package manager;
            nothing is executed.
        StepFailedError: A step exited nonzero; later steps did not run.
    """
    if strategy is InstallerStrategy.UNSUPPORTED:
        raise UnsupportedEnvironmentError(
            "Unsupported package manager. Install dependencies manually."
        )

    result = run_chain(strategy_steps(strategy), context=context, runner=runner)
    if not result.ok:
        assert result.failed_step is not None
        raise StepFailedError(result.failed_step, result.exit_status)
    return result


# ── Toolchain ───────────────────────────────────────────────────


def detect_toolchain_state(
    context: EnvContext,
    which: Which = shutil.which,
) -> ToolchainState:
    if which(TOOLCHAIN_MANAGER, path=context.search_path):
        return ToolchainState.INSTALLED
    return ToolchainState.NOT_INSTALLED


def bootstrap_command(installer_url: str = DEFAULT_INSTALLER_URL) -> CommandSpec:
    """Fetch the rustup bootstrap script and pipe it into ``sh -s -- -y``."""
    pipeline = (
        f"curl --proto '=https' --tlsv1.2 -sSf {shlex.quote(installer_url)}"
        " | sh -s -- -y"
    )
    return CommandSpec(program="sh", args=("-c", pipeline))


def toolchain_step(
    state: ToolchainState,
    installer_url: str = DEFAULT_INSTALLER_URL,
) -> PlannedStep:
    if state is ToolchainState.INSTALLED:
        return PlannedStep(
            label="Updating Rust toolchain",
            command=CommandSpec(program=TOOLCHAIN_MANAGER, args=("update",)),
        )
    return PlannedStep(
        label="Installing Rust",
        command=bootstrap_command(installer_url),
    )


def install_toolchain(
    context: EnvContext,
    state: ToolchainState,
    *,
    installer_url: str = DEFAULT_INSTALLER_URL,
    runner: Runner = run_command,
) -> str:
    """Update or freshly install the toolchain.

    Returns:
        ``"updated"`` or ``"installed"``.

    Raises:
        ToolchainInstallError: The update or installer exited nonzero.
    """
    step = toolchain_step(state, installer_url)
    status = runner(step.label, step.command, context=context)

    if state is ToolchainState.INSTALLED:
        if status != 0:
            raise ToolchainInstallError(f"Failed to update Rust (exit {status})")
        return "updated"

    if status != 0:
        raise ToolchainInstallError(f"Rust installation failed! (exit {status})")
    return "installed"

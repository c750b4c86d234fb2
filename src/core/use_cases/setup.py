"""
Setup use case — the ordered install pipeline.

    dependencies → toolchain → load env → force PATH → profile → verify

Each step blocks until it completes.  The first ``SetupError`` stops
the run and is recorded on the result; nothing already done is rolled
back.  Progress is reported through a ``reporter(level, message)``
callable so the CLI can render it while core stays UI-free.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from src.core.errors import SetupError, UnsupportedEnvironmentError
from src.core.models.config import SetupConfig
from src.core.models.environment import EnvContext
from src.core.models.strategy import InstallerStrategy, ToolchainState
from src.core.services.environment import force_update_path, load_toolchain_env
from src.core.services.installer import (
    detect_toolchain_state,
    install_dependencies,
    install_toolchain,
    select_strategy,
    strategy_steps,
    toolchain_step,
)
from src.core.services.profile import (
    guard_line,
    has_guard,
    resolve_profile_target,
    update_shell_profile,
)
from src.core.services.runner import Runner, run_command
from src.core.services.verify import VerificationReport, verify_installation

logger = logging.getLogger(__name__)

# reporter(level, message) — level is info | warn | success | detail
Reporter = Callable[[str, str], None]

_REPORT_LEVELS = {
    "info": logging.INFO,
    "detail": logging.INFO,
    "success": logging.INFO,
    "warn": logging.WARNING,
}


def _log_reporter(level: str, message: str) -> None:
    logger.log(_REPORT_LEVELS.get(level, logging.INFO), message)


@dataclass
class SetupResult:
    """Result of a setup run (or a dry-run plan)."""

    strategy: InstallerStrategy | None = None
    dependency_steps: list[str] = field(default_factory=list)
    toolchain_state: ToolchainState | None = None
    toolchain_action: str = ""
    env_file_found: bool = False
    profile_path: Path | None = None
    profile_updated: bool = False
    verification: VerificationReport | None = None
    context: EnvContext | None = None
    dry_run: bool = False
    planned: list[dict] = field(default_factory=list)
    error: str | None = None
    failed_step: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "dry_run": self.dry_run,
            "strategy": self.strategy.value if self.strategy else None,
            "toolchain_state": self.toolchain_state.value if self.toolchain_state else None,
        }
        if self.error:
            result["error"] = self.error
            result["failed_step"] = self.failed_step

        if self.dry_run:
            result["planned"] = self.planned
            result["profile_needs_update"] = self.profile_updated
        else:
            result["dependency_steps"] = self.dependency_steps
            result["toolchain_action"] = self.toolchain_action
            result["profile_updated"] = self.profile_updated

        result["profile_path"] = str(self.profile_path) if self.profile_path else None
        if self.verification:
            result["versions"] = self.verification.to_dict()
        if self.context:
            result["environment"] = self.context.exported()
        return result


def run_setup(
    context: EnvContext,
    config: SetupConfig | None = None,
    *,
    reporter: Reporter | None = None,
    runner: Runner | None = None,
    dry_run: bool = False,
) -> SetupResult:
    """Install and configure the Rust toolchain.

    Args:
        context: Starting environment (usually from ``os.environ``).
        config: Setup settings; defaults when None.
        reporter: Receives progress messages; logs them when None.
        runner: Command runner override (tests inject fakes here).
        dry_run: Resolve and record the plan without executing anything.

    Returns:
        SetupResult.  ``error`` is set when a step failed; ``context``
        holds the environment to apply to the invoking shell.
    """
    config = config or SetupConfig()
    report = reporter or _log_reporter
    if runner is None:
        runner = functools.partial(
            run_command,
            interval=config.spinner_interval,
            glyphs=config.spinner_glyphs,
        )

    if dry_run:
        return plan_setup(context, config)

    result = SetupResult(context=context)
    report("info", "🚀 Starting Rust setup process...")

    try:
        # ── System dependencies ──
        report("info", "Checking system dependencies...")
        strategy = select_strategy(context)
        result.strategy = strategy
        chain = install_dependencies(context, strategy, runner=runner)
        result.dependency_steps = chain.completed

        # ── Toolchain ──
        state = detect_toolchain_state(context)
        result.toolchain_state = state
        if state is ToolchainState.INSTALLED:
            report("info", "Found existing Rust installation")
        else:
            report("info", "Starting Rust installation (this may take a few minutes)...")
        action = install_toolchain(
            context, state,
            installer_url=config.installer_url,
            runner=runner,
        )
        result.toolchain_action = action
        if action == "updated":
            report("success", "Rust updated to latest version")
        else:
            report("success", "Rust installed successfully")

        # ── Environment ──
        report("info", "Loading Rust environment...")
        context, found = load_toolchain_env(context)
        result.env_file_found = found
        if found:
            report("success", "Rust environment loaded")
        else:
            report("warn", f"Rust environment file not found at {context.cargo_env_file}")

        report("info", "Force updating PATH")
        context = force_update_path(context)
        result.context = context
        report("success", "PATH updated successfully")

        # ── Shell profile ──
        profile = update_shell_profile(
            context,
            interval=config.spinner_interval,
            glyphs=config.spinner_glyphs,
        )
        result.profile_path = profile.path
        result.profile_updated = profile.changed
        if profile.changed:
            report("success", "Shell profile updated")
        else:
            logger.info("Shell profile %s already configured", profile.path)

        # ── Verification ──
        report("info", "Verifying installation...")
        verification = verify_installation(context)
        result.verification = verification
        report("success", "Rust components verified")
        report("detail", verification.rustc_version)
        report("detail", verification.cargo_version)

    except SetupError as e:
        logger.debug("Setup stopped at step '%s': %s", e.step, e)
        result.error = str(e)
        result.failed_step = e.step
        return result

    report("success", "✨ Rust setup completed successfully!")
    return result


def plan_setup(context: EnvContext, config: SetupConfig | None = None) -> SetupResult:
    """Resolve what a setup run would do, without side effects."""
    config = config or SetupConfig()
    result = SetupResult(context=context, dry_run=True)

    strategy = select_strategy(context)
    result.strategy = strategy
    if strategy is InstallerStrategy.UNSUPPORTED:
        err = UnsupportedEnvironmentError(
            "Unsupported package manager. Install dependencies manually."
        )
        result.error = str(err)
        result.failed_step = err.step
        return result

    state = detect_toolchain_state(context)
    result.toolchain_state = state

    steps = [*strategy_steps(strategy), toolchain_step(state, config.installer_url)]
    result.planned = [
        {"label": step.label, "command": step.command.display()} for step in steps
    ]

    result.profile_path = resolve_profile_target(context.shell, context.home)
    guard = guard_line(context.cargo_home)
    try:
        result.profile_updated = not has_guard(result.profile_path, guard)
    except SetupError as e:
        result.error = str(e)
        result.failed_step = e.step
    return result

"""
Detection use cases — read-only views of the host.

``detect_environment`` answers "what would setup do here?" and
``check_installation`` runs only the verification step.  Neither
spawns an install command nor writes any file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.core.errors import ProfileUpdateError, VerificationError
from src.core.models.environment import EnvContext
from src.core.models.strategy import InstallerStrategy, ToolchainState
from src.core.services.environment import load_toolchain_env
from src.core.services.installer import detect_toolchain_state, select_strategy
from src.core.services.profile import guard_line, has_guard, resolve_profile_target
from src.core.services.verify import VerificationReport, verify_installation

logger = logging.getLogger(__name__)


@dataclass
class DetectResult:
    """Result of the detect use case."""

    strategy: InstallerStrategy = InstallerStrategy.UNSUPPORTED
    toolchain_state: ToolchainState = ToolchainState.NOT_INSTALLED
    profile_path: Path | None = None
    profile_configured: bool = False
    rustup_home: Path | None = None
    cargo_home: Path | None = None

    @property
    def supported(self) -> bool:
        return self.strategy is not InstallerStrategy.UNSUPPORTED

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy.value,
            "supported": self.supported,
            "toolchain_state": self.toolchain_state.value,
            "profile_path": str(self.profile_path) if self.profile_path else None,
            "profile_configured": self.profile_configured,
            "rustup_home": str(self.rustup_home) if self.rustup_home else None,
            "cargo_home": str(self.cargo_home) if self.cargo_home else None,
        }


def detect_environment(context: EnvContext) -> DetectResult:
    """Probe package manager, toolchain state and profile target."""
    profile_path = resolve_profile_target(context.shell, context.home)

    try:
        configured = has_guard(profile_path, guard_line(context.cargo_home))
    except ProfileUpdateError as e:
        logger.warning("Cannot inspect %s: %s", profile_path, e)
        configured = False

    return DetectResult(
        strategy=select_strategy(context),
        toolchain_state=detect_toolchain_state(context),
        profile_path=profile_path,
        profile_configured=configured,
        rustup_home=context.rustup_home,
        cargo_home=context.cargo_home,
    )


@dataclass
class VerifyResult:
    """Result of the verify use case."""

    report: VerificationReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"ok": False, "error": self.error}
        assert self.report is not None
        return {"ok": True, "versions": self.report.to_dict()}


def check_installation(context: EnvContext) -> VerifyResult:
    """Run the verification step against the toolchain environment."""
    loaded, _ = load_toolchain_env(context)
    try:
        return VerifyResult(report=verify_installation(loaded))
    except VerificationError as e:
        return VerifyResult(error=str(e))

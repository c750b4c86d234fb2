"""
Installation verification — are rustc and cargo on the search path?

Version strings are best effort: a failing ``--version`` call gives
``""`` instead of failing the run.  Missing binaries are fatal.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from src.core.data.constants import BUILD_TOOL, COMPILER
from src.core.errors import VerificationError
from src.core.models.environment import EnvContext

logger = logging.getLogger(__name__)


@dataclass
class VerificationReport:
    """Version strings reported by the installed toolchain."""

    rustc_version: str = ""
    cargo_version: str = ""

    def to_dict(self) -> dict:
        return {"rustc": self.rustc_version, "cargo": self.cargo_version}


def query_version(binary: str, context: EnvContext) -> str:
    """Run ``<binary> --version`` and return its first output line."""
    program = shutil.which(binary, path=context.search_path)
    if program is None:
        return ""
    try:
        r = subprocess.run(
            [program, "--version"],
            capture_output=True, text=True, timeout=10,
            env=context.as_environ(),
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug("%s --version failed: %s", binary, e)
        return ""
    if r.returncode != 0:
        return ""
    return r.stdout.strip().splitlines()[0] if r.stdout.strip() else ""


def verify_installation(
    context: EnvContext,
    which: Callable[..., str | None] = shutil.which,
) -> VerificationReport:
    """Check both binaries, then collect their versions.

    Raises:
        VerificationError: ``rustc`` or ``cargo`` is not on the search path.
    """
    missing = [
        binary for binary in (COMPILER, BUILD_TOOL)
        if not which(binary, path=context.search_path)
    ]
    if missing:
        raise VerificationError(
            f"Rust components not found! (missing: {', '.join(missing)})"
        )

    return VerificationReport(
        rustc_version=query_version(COMPILER, context),
        cargo_version=query_version(BUILD_TOOL, context),
    )

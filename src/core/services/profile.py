"""
Shell profile — idempotent guard block for future shell sessions.

The guard line ``source "<CARGO_HOME>/env"`` is both the duplicate
check (exact substring match) and the activation line.  It is appended
at most once, together with a comment, via an atomic rewrite.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from src.core.data.constants import PROFILE_COMMENT, SPINNER_GLYPHS, SPINNER_INTERVAL_S
from src.core.data.profile_maps import FALLBACK_PROFILE, PROFILE_MAP
from src.core.errors import ProfileUpdateError
from src.core.models.environment import EnvContext
from src.core.persistence.text_file import atomic_write_text, read_text_or_empty
from src.core.services.spinner import Spinner

logger = logging.getLogger(__name__)


@dataclass
class ProfileUpdate:
    """What the profile step did."""

    path: Path
    guard: str
    changed: bool

    def to_dict(self) -> dict:
        return {"path": str(self.path), "guard": self.guard, "changed": self.changed}


def resolve_profile_target(shell: str, home: Path) -> Path:
    """Map the active shell (``$SHELL``) to its startup file."""
    for name, filename in PROFILE_MAP.items():
        if shell.endswith(f"/{name}"):
            return home / filename
    return home / FALLBACK_PROFILE


def guard_line(cargo_home: Path) -> str:
    return f'source "{cargo_home}/env"'


def has_guard(path: Path, guard: str) -> bool:
    try:
        return guard in read_text_or_empty(path)
    except OSError as e:
        raise ProfileUpdateError(f"Cannot read {path}: {e}") from e


def ensure_profile_block(path: Path, guard: str) -> bool:
    """Append the guard block unless the guard line is already present.

    Returns:
        True if the file was changed.

    Raises:
        ProfileUpdateError: The file could not be read or written.
    """
    try:
        content = read_text_or_empty(path)
    except OSError as e:
        raise ProfileUpdateError(f"Cannot read {path}: {e}") from e

    if guard in content:
        logger.debug("%s already contains %s", path, guard)
        return False

    try:
        atomic_write_text(path, f"{content}\n{PROFILE_COMMENT}\n{guard}\n")
    except OSError as e:
        raise ProfileUpdateError(f"Failed to update shell profile {path}: {e}") from e

    logger.info("Appended Rust environment block to %s", path)
    return True


def update_shell_profile(
    context: EnvContext,
    *,
    interval: float = SPINNER_INTERVAL_S,
    glyphs: Sequence[str] = SPINNER_GLYPHS,
    stream: TextIO | None = None,
) -> ProfileUpdate:
    """Make the active shell's profile source the cargo env on startup."""
    path = resolve_profile_target(context.shell, context.home)
    guard = guard_line(context.cargo_home)

    if has_guard(path, guard):
        return ProfileUpdate(path=path, guard=guard, changed=False)

    with Spinner("Updating shell profile", interval=interval, glyphs=glyphs, stream=stream):
        changed = ensure_profile_block(path, guard)
    return ProfileUpdate(path=path, guard=guard, changed=changed)

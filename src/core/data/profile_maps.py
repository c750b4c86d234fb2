"""
L0 Data — Shell identity to profile file mapping.

Only bash and zsh are recognised explicitly; every other shell falls
back to the generic ``~/.profile``.
"""

from __future__ import annotations

PROFILE_MAP: dict[str, str] = {
    "bash": ".bashrc",
    "zsh": ".zshrc",
}

FALLBACK_PROFILE = ".profile"

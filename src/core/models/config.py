"""
Setup configuration model — the optional ``rustsetup.yml``.

Every field has a default, so an absent config file means "use the
defaults".  Home directories left unset here fall back to the process
environment and then to ``~/.rustup`` / ``~/.cargo``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.core.data.constants import (
    DEFAULT_INSTALLER_URL,
    SPINNER_GLYPHS,
    SPINNER_INTERVAL_S,
)


class SetupConfig(BaseModel):
    """User-tunable settings for a setup run."""

    rustup_home: str | None = None
    cargo_home: str | None = None
    installer_url: str = DEFAULT_INSTALLER_URL

    spinner_interval: float = Field(default=SPINNER_INTERVAL_S, gt=0)
    spinner_glyphs: list[str] = Field(
        default_factory=lambda: list(SPINNER_GLYPHS),
        min_length=1,
    )

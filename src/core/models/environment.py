"""
EnvContext — the process environment a setup run works against.

The search path and the two toolchain homes are held here instead of
being written into ``os.environ``.  Each step returns an updated copy;
the CLI applies the final context to the invoking shell by printing
``export`` lines.  The search path is only ever extended.
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from src.core.models.config import SetupConfig


def _expand(value: str, home: Path) -> Path:
    """Expand a leading ``~`` against the context's home, not the real one."""
    if value == "~":
        return home
    if value.startswith("~/"):
        return home / value[2:]
    return Path(value)


class EnvContext(BaseModel):
    """Immutable snapshot of the environment seen by setup steps."""

    model_config = ConfigDict(frozen=True)

    home: Path
    shell: str = ""
    rustup_home: Path
    cargo_home: Path
    path: tuple[str, ...] = ()
    base_environ: dict[str, str] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        config: SetupConfig | None = None,
    ) -> EnvContext:
        """Build a context from a process environment.

        Home directories resolve as: environment variable, then config
        file value, then the default under ``$HOME``.
        """
        env = dict(os.environ if environ is None else environ)
        config = config or SetupConfig()
        home = Path(env.get("HOME") or Path.home())

        rustup_raw = env.get("RUSTUP_HOME") or config.rustup_home or "~/.rustup"
        cargo_raw = env.get("CARGO_HOME") or config.cargo_home or "~/.cargo"

        return cls(
            home=home,
            shell=env.get("SHELL", ""),
            rustup_home=_expand(rustup_raw, home),
            cargo_home=_expand(cargo_raw, home),
            path=tuple(p for p in env.get("PATH", "").split(os.pathsep) if p),
            base_environ=env,
        )

    # ── Derived values ──────────────────────────────────────────

    @property
    def cargo_bin(self) -> Path:
        return self.cargo_home / "bin"

    @property
    def cargo_env_file(self) -> Path:
        """The env script rustup writes; sourcing it activates the toolchain."""
        return self.cargo_home / "env"

    @property
    def search_path(self) -> str:
        return os.pathsep.join(self.path)

    def on_path(self, entry: str | Path) -> bool:
        return str(entry) in self.path

    # ── Functional updates ──────────────────────────────────────

    def with_path_prefix(self, entry: str | Path) -> EnvContext:
        """Return a copy with ``entry`` at the front of the search path.

        An entry already on the path is left where it is.
        """
        entry = str(entry)
        if entry in self.path:
            return self
        return self.model_copy(update={"path": (entry, *self.path)})

    def with_homes(
        self,
        *,
        rustup_home: Path | None = None,
        cargo_home: Path | None = None,
    ) -> EnvContext:
        update: dict[str, Path] = {}
        if rustup_home is not None:
            update["rustup_home"] = rustup_home
        if cargo_home is not None:
            update["cargo_home"] = cargo_home
        return self.model_copy(update=update) if update else self

    # ── Boundary ────────────────────────────────────────────────

    def exported(self) -> dict[str, str]:
        """The three variables this tool owns."""
        return {
            "RUSTUP_HOME": str(self.rustup_home),
            "CARGO_HOME": str(self.cargo_home),
            "PATH": self.search_path,
        }

    def as_environ(self) -> dict[str, str]:
        """Environment for child processes: base env plus owned variables."""
        return {**self.base_environ, **self.exported()}

    def export_lines(self) -> list[str]:
        """POSIX ``export`` statements, safe to ``eval`` in the caller's shell."""
        return [
            f"export {name}={shlex.quote(value)}"
            for name, value in self.exported().items()
        ]

"""
Command models — what the runner executes and what it reports back.

A ``CommandSpec`` is immutable once built.  Strategy chains are ordered
lists of ``PlannedStep`` (label + command); running a chain produces a
``ChainResult``.  Child output is never captured, so the only result of a
single command is its exit status.
"""

from __future__ import annotations

import os
import shlex

from pydantic import BaseModel, ConfigDict, Field


class CommandSpec(BaseModel):
    """An executable plus its ordered arguments."""

    model_config = ConfigDict(frozen=True)

    program: str
    args: tuple[str, ...] = ()
    needs_sudo: bool = False

    def argv(self, *, as_root: bool = False) -> list[str]:
        """Full argument vector, with ``sudo`` prefixed when required.

        Args:
            as_root: The calling process already runs as root, so no
                ``sudo`` prefix is added.
        """
        argv = [self.program, *self.args]
        if self.needs_sudo and not as_root:
            argv.insert(0, "sudo")
        return argv

    def display(self, *, as_root: bool | None = None) -> str:
        """Shell-quoted form for logs and dry-run output.

        ``as_root`` defaults to whether this process runs as root, so
        the shown command matches what the runner executes.
        """
        if as_root is None:
            as_root = os.geteuid() == 0
        return shlex.join(self.argv(as_root=as_root))


class PlannedStep(BaseModel):
    """A labelled command inside a strategy chain."""

    model_config = ConfigDict(frozen=True)

    label: str
    command: CommandSpec


class ChainResult(BaseModel):
    """Outcome of running a chain of steps with fail-fast semantics."""

    completed: list[str] = Field(default_factory=list)
    failed_step: str | None = None
    exit_status: int = 0

    @property
    def ok(self) -> bool:
        return self.failed_step is None

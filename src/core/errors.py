"""
Setup errors — one class per fatal condition.

Every failure is raised where it is detected and handled once by the
setup use case, which records it on the result.  The CLI turns it into
a red ``[ERROR]`` line and exit code 1.  Nothing is retried and nothing
is rolled back.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for every fatal setup condition."""

    step = "setup"
    exit_code = 1


class UnsupportedEnvironmentError(SetupError):
    """No recognised package manager on the search path."""

    step = "dependencies"


class StepFailedError(SetupError):
    """An external command in a strategy chain exited nonzero."""

    step = "dependencies"

    def __init__(self, label: str, exit_status: int) -> None:
        self.label = label
        self.exit_status = exit_status
        super().__init__(f"{label} failed (exit {exit_status})")


class ToolchainInstallError(SetupError):
    """``rustup update`` or the bootstrap installer exited nonzero."""

    step = "toolchain"


class PathUpdateError(SetupError):
    """``$CARGO_HOME/bin`` could not be put on the search path."""

    step = "path"


class ProfileUpdateError(SetupError):
    """The shell profile could not be written."""

    step = "profile"


class VerificationError(SetupError):
    """``rustc`` or ``cargo`` is missing after installation."""

    step = "verify"


class InvocationError(SetupError):
    """The command was run in a way that cannot persist its environment."""

    step = "invocation"

"""
Command runner — the SINGLE PLACE where setup steps spawn processes.

One child process, output discarded, plus a spinner thread rendering
progress on the status stream.  The caller blocks until the child
exits and gets its exit status back unchanged.  There is no timeout:
a hung child blocks the run.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Callable, Iterable, Sequence
from typing import TextIO

from src.core.data.constants import (
    EXIT_CANNOT_EXECUTE,
    EXIT_COMMAND_NOT_FOUND,
    SPINNER_GLYPHS,
    SPINNER_INTERVAL_S,
)
from src.core.models.command import ChainResult, CommandSpec, PlannedStep
from src.core.models.environment import EnvContext
from src.core.services.spinner import Spinner

logger = logging.getLogger(__name__)

# (label, command, *, context=...) -> exit status
Runner = Callable[..., int]


def run_command(
    label: str,
    command: CommandSpec,
    *,
    context: EnvContext | None = None,
    interval: float = SPINNER_INTERVAL_S,
    glyphs: Sequence[str] = SPINNER_GLYPHS,
    stream: TextIO | None = None,
) -> int:
    """Run one command in the background while a spinner renders.

    The program is resolved on the context's search path; when it is
    missing nothing is spawned and 127 is returned, as a shell would.

    Args:
        label: Task description shown next to the spinner.
        command: What to execute.
        context: Environment for the child (default: the current process).
        interval: Seconds between spinner frames.
        glyphs: Spinner frame cycle.
        stream: Status stream for the spinner (default: stderr).

    Returns:
        The child's exit status.
    """
    argv = command.argv(as_root=os.geteuid() == 0)
    search_path = context.search_path if context is not None else None
    env = context.as_environ() if context is not None else None

    program = shutil.which(argv[0], path=search_path)
    if program is None:
        logger.warning("%s: '%s' not found on PATH", label, argv[0])
        return EXIT_COMMAND_NOT_FOUND

    logger.debug("Running [%s]: %s", label, command.display())
    start = time.monotonic()
    try:
        proc = subprocess.Popen(
            [program, *argv[1:]],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            env=env,
        )
    except OSError as e:
        logger.error("%s: cannot execute %s: %s", label, program, e)
        return EXIT_CANNOT_EXECUTE

    with Spinner(label, interval=interval, glyphs=glyphs, stream=stream):
        exit_status = proc.wait()

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.info("%s finished (exit %d, %dms)", label, exit_status, elapsed_ms)
    return exit_status


def run_chain(
    steps: Iterable[PlannedStep],
    *,
    context: EnvContext | None = None,
    runner: Runner = run_command,
) -> ChainResult:
    """Run steps in order, stopping at the first nonzero exit status."""
    result = ChainResult()
    for step in steps:
        status = runner(step.label, step.command, context=context)
        if status != 0:
            logger.warning("Chain stopped at '%s' (exit %d)", step.label, status)
            result.failed_step = step.label
            result.exit_status = status
            return result
        result.completed.append(step.label)
    return result

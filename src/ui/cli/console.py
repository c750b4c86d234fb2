"""
Console output — tagged status lines on stderr.

stdout is kept clean for ``export`` lines and JSON, so every
human-facing message here goes to stderr.
"""

from __future__ import annotations

import click

_TAGS: dict[str, tuple[str, str]] = {
    "info": ("[INFO]", "blue"),
    "warn": ("[WARN]", "yellow"),
    "error": ("[ERROR]", "red"),
    "success": ("[SUCCESS]", "green"),
    "task": ("[TASK]", "magenta"),
}


def say(level: str, message: str) -> None:
    """Print one tagged line, e.g. ``[INFO] Loading Rust environment...``."""
    if level == "detail":
        click.secho(message, fg="cyan", err=True)
        return
    tag, color = _TAGS.get(level, _TAGS["info"])
    click.echo(f"{click.style(tag, fg=color)} {message}", err=True)


def make_reporter(quiet: bool = False):
    """Reporter for the setup use case; quiet keeps warnings only."""

    def report(level: str, message: str) -> None:
        if quiet and level not in ("warn", "error"):
            return
        say(level, message)

    return report

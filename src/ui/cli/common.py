"""
Shared CLI helpers — config + environment resolution.
"""

from __future__ import annotations

import sys

import click

from src.core.models.config import SetupConfig
from src.core.models.environment import EnvContext
from src.ui.cli.console import say


def load_context(ctx: click.Context) -> tuple[SetupConfig, EnvContext]:
    """Load rustsetup.yml and build the starting EnvContext.

    Exits with status 1 on a configuration error.
    """
    from src.core.config.loader import ConfigError, load_config

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        say("error", str(e))
        sys.exit(1)
    return config, EnvContext.from_environ(config=config)


def stdout_is_terminal() -> bool:
    """True when stdout is not being captured by the calling shell."""
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False

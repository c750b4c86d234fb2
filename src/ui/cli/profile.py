"""
CLI commands for the shell profile.

Thin wrappers over ``src.core.services.profile``.
"""

from __future__ import annotations

import json
import sys

import click

from src.ui.cli.common import load_context
from src.ui.cli.console import say


@click.group()
def profile() -> None:
    """Shell profile — show the target file, add the Rust env block."""


@profile.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show which profile file is used and whether it sources cargo's env."""
    from src.core.errors import ProfileUpdateError
    from src.core.services.profile import guard_line, has_guard, resolve_profile_target

    _config, env = load_context(ctx)
    path = resolve_profile_target(env.shell, env.home)
    guard = guard_line(env.cargo_home)
    try:
        configured = has_guard(path, guard)
    except ProfileUpdateError as e:
        say("error", str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(
            {"path": str(path), "guard": guard, "configured": configured},
            indent=2,
        ))
        return

    click.secho(f"📄 {path}", fg="cyan", bold=True)
    click.echo(f"   Shell: {env.shell or '(unset)'}")
    click.echo(f"   Guard: {guard}")
    if configured:
        click.secho("   ✓ Rust environment is sourced", fg="green")
    else:
        click.secho("   ✗ Rust environment is not sourced yet", fg="yellow")


@profile.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Append the Rust environment block to the shell profile (idempotent)."""
    from src.core.errors import ProfileUpdateError
    from src.core.services.profile import update_shell_profile

    config, env = load_context(ctx)
    try:
        result = update_shell_profile(
            env,
            interval=config.spinner_interval,
            glyphs=config.spinner_glyphs,
        )
    except ProfileUpdateError as e:
        say("error", str(e))
        sys.exit(1)

    if result.changed:
        say("success", f"Shell profile updated: {result.path}")
    else:
        say("info", f"Shell profile already configured: {result.path}")

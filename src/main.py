"""
Rust environment setup — CLI entrypoint.

Usage:
    eval "$(python -m src.main install)"
    python -m src.main install --dry-run
    python -m src.main detect
    python -m src.main verify
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from src.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    resolve_level,
    setup_logging,
)
from src.ui.cli.common import load_context, stdout_is_terminal
from src.ui.cli.console import make_reporter, say

from src import __version__

_EVAL_HINT = 'eval "$(rustsetup install)"'


@click.group()
@click.version_option(version=__version__, prog_name="rustsetup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to rustsetup.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Rust environment setup — install and configure the Rust toolchain."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--dry-run", is_flag=True, help="Show the plan but don't execute.")
@click.option(
    "--shell-env/--no-shell-env",
    default=True,
    help="Print export lines for the calling shell to eval (default: on).",
)
@click.pass_context
def install(ctx: click.Context, as_json: bool, dry_run: bool, shell_env: bool) -> None:
    """Install or update Rust and configure the shell environment.

    Run it through your shell so the current session picks up the
    new PATH:

        eval "$(rustsetup install)"

    Use --no-shell-env to only update the shell profile for new sessions.
    """
    from src.core.errors import InvocationError
    from src.core.use_cases.setup import run_setup

    emit_env = shell_env and not dry_run and not as_json
    if emit_env and stdout_is_terminal():
        err = InvocationError(
            "This command must be evaluated by your shell, not executed. Please run:"
        )
        say("error", str(err))
        click.echo(f"\n  {_EVAL_HINT}\n", err=True)
        click.echo("  or pass --no-shell-env to only update your shell profile.\n", err=True)
        sys.exit(err.exit_code)

    config, env = load_context(ctx)
    quiet = ctx.obj.get("quiet", False) or as_json
    result = run_setup(env, config, reporter=make_reporter(quiet=quiet), dry_run=dry_run)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        say("error", result.error)
        sys.exit(1)

    if dry_run:
        assert result.strategy is not None
        click.secho(f"\n🧭 [dry-run] strategy: {result.strategy.value}", fg="cyan", bold=True, err=True)
        for i, step in enumerate(result.planned, 1):
            click.echo(f"   {i}. {step['label']}", err=True)
            click.echo(f"      $ {step['command']}", err=True)
        action = "append Rust env block" if result.profile_updated else "already configured"
        click.echo(f"   Profile: {result.profile_path} ({action})\n", err=True)
        return

    assert result.context is not None
    if emit_env:
        for line in result.context.export_lines():
            click.echo(line)
        click.echo(
            "👉 Current shell has been configured. "
            "New shells will automatically have Rust available.",
            err=True,
        )
    else:
        click.echo(
            "👉 New shells will automatically have Rust available. "
            f'For this one, run: source "{result.context.cargo_env_file}"',
            err=True,
        )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Detect the package manager, toolchain state and shell profile."""
    from src.core.models.strategy import ToolchainState
    from src.core.use_cases.detect import detect_environment

    _config, env = load_context(ctx)
    result = detect_environment(env)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho("\n🔍 Rust environment", fg="cyan", bold=True)
    if result.supported:
        click.secho(f"   ✓ Package manager: {result.strategy.value}", fg="green")
    else:
        click.secho("   ✗ Package manager: unsupported", fg="red")

    installed = result.toolchain_state is ToolchainState.INSTALLED
    click.echo(f"   {'✓' if installed else '○'} rustup: {result.toolchain_state.value}")
    click.echo(f"   RUSTUP_HOME: {result.rustup_home}")
    click.echo(f"   CARGO_HOME:  {result.cargo_home}")
    configured = "configured" if result.profile_configured else "not configured"
    click.echo(f"   Profile: {result.profile_path} ({configured})")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, as_json: bool) -> None:
    """Check that rustc and cargo are installed and show their versions."""
    from src.core.use_cases.detect import check_installation

    _config, env = load_context(ctx)
    result = check_installation(env)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        say("error", result.error)
        sys.exit(1)

    assert result.report is not None
    say("success", "Rust components verified")
    say("detail", result.report.rustc_version)
    say("detail", result.report.cargo_version)


@cli.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Print export lines for the Rust environment.

    Apply them to the current shell with:

        eval "$(rustsetup env)"
    """
    from src.core.services.environment import load_toolchain_env

    _config, context = load_context(ctx)
    loaded, _found = load_toolchain_env(context)
    for line in loaded.export_lines():
        click.echo(line)


# ── Register sub-command groups from src/ui/cli/ ──────────────────

from src.ui.cli.profile import profile

cli.add_command(profile)


if __name__ == "__main__":
    cli()

"""
Tests for CLI commands — install guard, dry-run, detect, verify, env,
profile, and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from src.main import cli


@pytest.fixture
def cli_env(home: Path, fake_bin: Path, tmp_path: Path, monkeypatch) -> dict:
    """Process environment for an isolated host; cwd has no rustsetup.yml."""
    monkeypatch.chdir(tmp_path)
    return {
        "HOME": str(home),
        "SHELL": "/bin/bash",
        "PATH": str(fake_bin),
        "RUSTUP_HOME": None,
        "CARGO_HOME": None,
        "RUSTSETUP_LOG_LEVEL": None,
    }


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Rust toolchain" in result.output
        for command in ("install", "detect", "verify", "env", "profile"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "rustsetup" in result.output
        assert "0.1.0" in result.output

    def test_invalid_config_exits_1(self, cli_env, tmp_path: Path):
        (tmp_path / "rustsetup.yml").write_text("spinner_interval: -1\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["detect"], env=cli_env)
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_missing_explicit_config(self, cli_env, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "nope.yml"), "detect"], env=cli_env,
        )
        assert result.exit_code == 1


class TestInstallCommand:
    def test_refuses_when_stdout_is_terminal(self, cli_env, home: Path, monkeypatch):
        monkeypatch.setattr("src.main.stdout_is_terminal", lambda: True)
        runner = CliRunner()
        result = runner.invoke(cli, ["install"], env=cli_env)

        assert result.exit_code == 1
        assert "must be evaluated by your shell" in result.output
        assert 'eval "$(rustsetup install)"' in result.output
        assert not (home / ".bashrc").exists()

    def test_no_shell_env_skips_terminal_check(self, cli_env, monkeypatch):
        monkeypatch.setattr("src.main.stdout_is_terminal", lambda: True)
        runner = CliRunner()
        result = runner.invoke(cli, ["install", "--no-shell-env"], env=cli_env)

        # no package manager on the fake PATH
        assert result.exit_code == 1
        assert "must be evaluated" not in result.output
        assert "Unsupported package manager" in result.output

    def test_unsupported_host(self, cli_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["install"], env=cli_env)
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
        assert "export PATH" not in result.output

    def test_dry_run(self, cli_env, make_exe, home: Path):
        make_exe("apt")
        runner = CliRunner()
        result = runner.invoke(cli, ["install", "--dry-run"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert "strategy: apt" in result.output
        assert "Updating package lists" in result.output
        assert "Installing Rust" in result.output
        assert "sh.rustup.rs" in result.output
        assert not (home / ".bashrc").exists()

    def test_dry_run_json(self, cli_env, make_exe):
        make_exe("pacman")
        runner = CliRunner()
        result = runner.invoke(cli, ["install", "--dry-run", "--json"], env=cli_env)

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["dry_run"] is True
        assert data["strategy"] == "pacman"
        assert [p["label"] for p in data["planned"]] == [
            "Updating system packages",
            "Installing base-devel",
            "Installing Rust",
        ]

    def test_dry_run_json_unsupported(self, cli_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["install", "--dry-run", "--json"], env=cli_env)
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["failed_step"] == "dependencies"


class TestDetectCommand:
    def test_detect_json(self, cli_env, make_exe, home: Path):
        make_exe("dnf")
        make_exe("yum")
        runner = CliRunner()
        result = runner.invoke(cli, ["detect", "--json"], env=cli_env)

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["strategy"] == "yum"
        assert data["supported"] is True
        assert data["toolchain_state"] == "not_installed"
        assert data["profile_path"] == str(home / ".bashrc")
        assert data["profile_configured"] is False
        assert data["cargo_home"] == str(home / ".cargo")

    def test_detect_human(self, cli_env, make_exe):
        make_exe("rustup")
        runner = CliRunner()
        result = runner.invoke(cli, ["detect"], env=cli_env)
        assert result.exit_code == 0
        assert "unsupported" in result.output
        assert "rustup: installed" in result.output

    def test_config_homes_apply(self, cli_env, tmp_path: Path):
        (tmp_path / "rustsetup.yml").write_text("cargo_home: ~/tools/cargo\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["detect", "--json"], env=cli_env)
        data = json.loads(result.output)
        assert data["cargo_home"] == cli_env["HOME"] + "/tools/cargo"

    def test_env_var_beats_config(self, cli_env, tmp_path: Path):
        (tmp_path / "rustsetup.yml").write_text("cargo_home: /from/config\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["detect", "--json"], env={**cli_env, "CARGO_HOME": "/from/env"},
        )
        assert json.loads(result.output)["cargo_home"] == "/from/env"


class TestVerifyCommand:
    def test_missing_components(self, cli_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["verify"], env=cli_env)
        assert result.exit_code == 1
        assert "Rust components not found" in result.output

    def test_components_in_cargo_bin(self, cli_env, make_exe, home: Path):
        cargo_bin = home / ".cargo" / "bin"
        make_exe("rustc", 'echo "rustc 1.82.0"', directory=cargo_bin)
        make_exe("cargo", 'echo "cargo 1.82.0"', directory=cargo_bin)
        runner = CliRunner()
        result = runner.invoke(cli, ["verify"], env=cli_env)

        assert result.exit_code == 0, result.output
        assert "[SUCCESS]" in result.output
        assert "rustc 1.82.0" in result.output
        assert "cargo 1.82.0" in result.output

    def test_verify_json(self, cli_env, make_exe):
        make_exe("rustc", 'echo "rustc 1.82.0"')
        make_exe("cargo", 'echo "cargo 1.82.0"')
        runner = CliRunner()
        result = runner.invoke(cli, ["--quiet", "verify", "--json"], env=cli_env)
        data = json.loads(result.output)
        assert data == {"ok": True, "versions": {"rustc": "rustc 1.82.0", "cargo": "cargo 1.82.0"}}


class TestEnvCommand:
    def test_prints_exports(self, cli_env, home: Path, fake_bin: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--quiet", "env"], env=cli_env)

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            f"export RUSTUP_HOME={home}/.rustup",
            f"export CARGO_HOME={home}/.cargo",
            f"export PATH={home}/.cargo/bin:{fake_bin}",
        ]


class TestProfileCommands:
    def test_show_json(self, cli_env, home: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["profile", "show", "--json"], env=cli_env)
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "path": str(home / ".bashrc"),
            "guard": f'source "{home}/.cargo/env"',
            "configured": False,
        }

    def test_update_is_idempotent(self, cli_env, home: Path):
        runner = CliRunner()
        first = runner.invoke(cli, ["profile", "update"], env=cli_env)
        second = runner.invoke(cli, ["profile", "update"], env=cli_env)

        assert first.exit_code == 0
        assert "Shell profile updated" in first.output
        assert second.exit_code == 0
        assert "already configured" in second.output
        assert (home / ".bashrc").read_text().count(".cargo/env") == 1

    def test_show_after_update(self, cli_env):
        runner = CliRunner()
        runner.invoke(cli, ["profile", "update"], env={**cli_env, "SHELL": "/usr/bin/zsh"})
        result = runner.invoke(cli, ["profile", "show"], env={**cli_env, "SHELL": "/usr/bin/zsh"})
        assert ".zshrc" in result.output
        assert "Rust environment is sourced" in result.output

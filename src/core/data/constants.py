"""
L0 Data — Fixed values shared across setup steps.
"""

from __future__ import annotations

# Remote bootstrap script fetched on a fresh install
DEFAULT_INSTALLER_URL = "https://sh.rustup.rs"

# Progress indicator
SPINNER_GLYPHS: tuple[str, ...] = ("🕘", "🕛", "🕒", "🕡")
SPINNER_INTERVAL_S = 0.1

# Shell "command not found" convention
EXIT_COMMAND_NOT_FOUND = 127
EXIT_CANNOT_EXECUTE = 126

# Binaries the run must leave on the search path
TOOLCHAIN_MANAGER = "rustup"
COMPILER = "rustc"
BUILD_TOOL = "cargo"

PROFILE_COMMENT = "# Rust environment"

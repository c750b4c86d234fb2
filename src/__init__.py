"""Rust environment setup — install and configure the Rust toolchain."""

__version__ = "0.1.0"

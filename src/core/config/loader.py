"""
Configuration loader — reads rustsetup.yml into a SetupConfig.

The file is optional.  It is looked up from the working directory
upwards; when nothing is found the defaults apply.  An explicitly
named file must exist and be valid.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.core.models.config import SetupConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "rustsetup.yml"


class ConfigError(Exception):
    """Raised when the setup configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for rustsetup.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to rustsetup.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> SetupConfig:
    """Load and validate the setup configuration.

    Args:
        path: Explicit path to rustsetup.yml. If None, searches upward
            and falls back to defaults.

    Returns:
        Validated SetupConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return SetupConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "rust" key or at the top level
    if isinstance(data.get("rust"), dict):
        data = data["rust"]

    try:
        config = SetupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup configuration: {e}") from e

    logger.info("Loaded setup config from %s", path)
    return config

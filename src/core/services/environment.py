"""
Toolchain environment — load the homes and put cargo's bin on PATH.

Both operations are pure with respect to the process: they take an
``EnvContext`` and return a new one.
"""

from __future__ import annotations

import logging

from src.core.errors import PathUpdateError
from src.core.models.environment import EnvContext

logger = logging.getLogger(__name__)


def load_toolchain_env(context: EnvContext) -> tuple[EnvContext, bool]:
    """Activate the toolchain environment in the context.

    Equivalent to sourcing ``$CARGO_HOME/env``: the homes stay as
    resolved and ``$CARGO_HOME/bin`` joins the search path.

    Returns:
        ``(context, env_file_found)``.
    """
    updated = context.with_path_prefix(context.cargo_bin)
    found = updated.cargo_env_file.is_file()
    if not found:
        logger.debug("Rust environment file not found at %s", updated.cargo_env_file)
    return updated, found


def force_update_path(context: EnvContext) -> EnvContext:
    """Ensure ``$CARGO_HOME/bin`` is on the search path.

    Raises:
        PathUpdateError: The entry is still missing afterwards.
    """
    updated = context.with_path_prefix(context.cargo_bin)
    if not updated.on_path(updated.cargo_bin):
        raise PathUpdateError("Failed to update PATH. Manual intervention required.")
    logger.debug("PATH now starts with %s", updated.path[0])
    return updated

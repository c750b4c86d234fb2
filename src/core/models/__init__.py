"""
Domain models — Pydantic types and enums for a setup run.

All models are re-exported here for convenient access:

    from src.core.models import CommandSpec, EnvContext, InstallerStrategy
"""

from src.core.models.command import ChainResult, CommandSpec, PlannedStep
from src.core.models.config import SetupConfig
from src.core.models.environment import EnvContext
from src.core.models.strategy import InstallerStrategy, ToolchainState

__all__ = [
    # command.py
    "ChainResult",
    "CommandSpec",
    "PlannedStep",
    # config.py
    "SetupConfig",
    # environment.py
    "EnvContext",
    # strategy.py
    "InstallerStrategy",
    "ToolchainState",
]

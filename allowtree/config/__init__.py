"""
Runtime Configuration Module

Provides configuration loading and management for allowtree.
"""

from .runtime import (
    LoggingConfig,
    ProofConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "ProofConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]

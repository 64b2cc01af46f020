"""
Runtime Configuration

Central configuration for batch proof computation and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from allowtree.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "ALLOWTREE_"


@dataclass
class ProofConfig:
    """Configuration for batch proof generation."""
    workers: Optional[int] = None  # None lets the executor pick
    chunk_size: int = 256

    def __post_init__(self):
        if self.workers is not None and self.workers < 1:
            raise ConfigException(
                f"proof workers must be >= 1, got {self.workers}",
                key="proof.workers",
            )
        if self.chunk_size < 1:
            raise ConfigException(
                f"proof chunk_size must be >= 1, got {self.chunk_size}",
                key="proof.chunk_size",
            )


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for allowtree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    proof: ProofConfig = field(default_factory=ProofConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ALLOWTREE_PROOF_WORKERS: Worker count for batch proofs
        - ALLOWTREE_PROOF_CHUNK_SIZE: Leaves per batch proof task
        - ALLOWTREE_LOG_LEVEL: Log level name
        - ALLOWTREE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        for env_key, key in (("PROOF_WORKERS", "workers"), ("PROOF_CHUNK_SIZE", "chunk_size")):
            raw = os.getenv(f"{ENV_PREFIX}{env_key}")
            if raw:
                try:
                    overrides.setdefault("proof", {})[key] = int(raw)
                except ValueError as e:
                    raise ConfigException(
                        f"{ENV_PREFIX}{env_key} must be an integer, got {raw!r}",
                        key=f"{ENV_PREFIX}{env_key}",
                    ) from e

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        unknown = sorted(set(data) - {"proof", "logging"})
        if unknown:
            raise ConfigException(
                f"Unknown configuration section(s): {', '.join(unknown)}",
                key=unknown[0],
            )

        proof_data = data.get("proof", {})
        logging_data = data.get("logging", {})

        try:
            proof = ProofConfig(**proof_data) if proof_data else ProofConfig()
            log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()
        except TypeError as e:
            raise ConfigException(f"Unknown configuration key: {e}") from e

        return cls(proof=proof, logging=log)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "proof" in overrides:
            new_config.proof = replace(self.proof, **overrides["proof"])

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "proof": {
                "workers": self.proof.workers,
                "chunk_size": self.proof.chunk_size,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
